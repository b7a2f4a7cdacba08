"""Annotation of an SV VCF stream with SVSCORE INFO fields."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from .breakends import BreakendPairer
from .config import AnnotateConfig
from .genes import GeneTable
from .output import OutputAssembler
from .score_source import IntervalScoreOracle, ScoreSource, TabixScoreSource
from .scorer import SVScorer
from .vcf_parser import VCFRecordReader, open_text

logger = logging.getLogger(__name__)


@dataclass
class AnnotationSummary:
    """Counts reported at the end of a run."""

    variants_read: int
    lines_written: int
    unpaired_breakends: int
    score_queries: int


class AnnotationContext:
    """State owned by one annotation run.

    Holds the gene table and score oracle loaded at start-up, the pending
    breakend map and the output buffer. Leaving the context closes the
    score source and drops any unpaired breakends.
    """

    def __init__(
        self,
        genes: GeneTable,
        source: ScoreSource,
        config: AnnotateConfig | None = None,
    ):
        self.config = config or AnnotateConfig()
        self.genes = genes
        self.source = source
        self.oracle = IntervalScoreOracle(
            source,
            score_column=self.config.score_column,
            cache=self.config.cache_queries,
        )
        self.scorer = SVScorer(genes, self.oracle, max_span=self.config.max_span)
        self.pairer = BreakendPairer()
        self.assembler = OutputAssembler(include_span=self.config.emit_symbolic_span)

    @classmethod
    def open(cls, config: AnnotateConfig) -> "AnnotationContext":
        """Load the gene table and open the score file named by ``config``."""
        genes = GeneTable.from_file(config.gene_file)
        source = TabixScoreSource(config.resolve_score_file())
        return cls(genes, source, config)

    def close(self) -> None:
        self.pairer.discard()
        self.assembler.clear()
        self.oracle.clear()
        close = getattr(self.source, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "AnnotationContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class SVAnnotator:
    """Score every record of an annotated SV VCF and write sorted output."""

    def __init__(self, context: AnnotationContext):
        self.context = context

    def annotate(self, lines: Iterable[str], out: IO[str]) -> AnnotationSummary:
        """Annotate a VCF stream.

        Header lines go to ``out`` as they are read. Data lines are written
        only after every record has been scored, so a fatal error leaves no
        data lines in ``out``.
        """
        ctx = self.context
        reader = VCFRecordReader(lines)

        for kind, item in reader:
            if kind == "header":
                out.write(item)
                continue

            if item.svtype == "BND":
                pair = ctx.pairer.offer(item)
                if pair is None:
                    continue
                scored = ctx.scorer.score_pair(pair)
            else:
                scored = ctx.scorer.score(item)
            ctx.assembler.add(scored)

        unpaired = ctx.pairer.discard()
        written = ctx.assembler.write(out)
        ctx.assembler.clear()

        summary = AnnotationSummary(
            variants_read=reader.variants_read,
            lines_written=written,
            unpaired_breakends=len(unpaired),
            score_queries=ctx.oracle.queries,
        )
        logger.info(
            "Annotated %d variants (%d lines written, %d score queries)",
            summary.variants_read,
            summary.lines_written,
            summary.score_queries,
        )
        return summary


def annotate_vcf(config: AnnotateConfig, vcf_path: Path | str, out: IO[str]) -> AnnotationSummary:
    """Annotate a VCF file using the gene table and score file from ``config``."""
    with open_text(vcf_path) as f, AnnotationContext.open(config) as ctx:
        return SVAnnotator(ctx).annotate(f, out)
