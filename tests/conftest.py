"""Pytest configuration and fixtures for svscore tests."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from fixtures.score_data import FakeScoreSource  # noqa: E402
from fixtures.sv_vcf_generator import SVVCFGenerator  # noqa: E402

from svscore.genes import GeneTable  # noqa: E402
from svscore.score_source import IntervalScoreOracle  # noqa: E402
from svscore.scorer import SVScorer  # noqa: E402

GENE_ROWS = [
    # chrom, start, stop, strand, symbol
    "1\t4000\t6000\t+\tGPLUS\n",
    "1\t4500\t7000\t+\tGPLUS\n",
    "2\t8000\t9500\t-\tGMINUS\n",
    "17\t100\t200\t+\tG1\n",
    "17\t150\t300\t+\tG1\n",
]


@pytest.fixture
def score_source() -> FakeScoreSource:
    """Empty in-memory score source; tests add the scores they need."""
    return FakeScoreSource()


@pytest.fixture
def oracle(score_source) -> IntervalScoreOracle:
    return IntervalScoreOracle(score_source)


@pytest.fixture
def gene_table() -> GeneTable:
    return GeneTable.from_lines(GENE_ROWS)


@pytest.fixture
def gene_file(tmp_path) -> Path:
    path = tmp_path / "genes.bed"
    path.write_text("".join(GENE_ROWS))
    return path


@pytest.fixture
def scorer(gene_table, oracle) -> SVScorer:
    return SVScorer(gene_table, oracle)



@pytest.fixture
def vcf_generator() -> type[SVVCFGenerator]:
    return SVVCFGenerator
