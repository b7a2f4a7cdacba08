"""Dependency and input checks for svscore."""

import importlib
import sys
from dataclasses import dataclass
from pathlib import Path

from .errors import SVScoreError
from .genes import parse_gene_line
from .vcf_parser import open_text

INDEX_SUFFIXES = (".tbi", ".csi")


@dataclass
class CheckResult:
    """Result of a dependency check."""

    name: str
    passed: bool
    version: str | None = None
    message: str | None = None


class DependencyChecker:
    """Check that svscore can run against the given inputs."""

    def __init__(self, score_file: Path | None = None, gene_file: Path | None = None):
        self.score_file = score_file
        self.gene_file = gene_file

    def check_python(self) -> CheckResult:
        """Check Python version is 3.11+."""
        version = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
        passed = sys.version_info >= (3, 11)

        return CheckResult(
            name="Python",
            passed=passed,
            version=version,
            message=None if passed else "Python 3.11+ required",
        )

    def check_pysam(self) -> CheckResult:
        """Check if pysam is installed."""
        try:
            pysam = importlib.import_module("pysam")
            version = getattr(pysam, "__version__", "unknown")
            return CheckResult(
                name="pysam",
                passed=True,
                version=version,
            )
        except ImportError:
            return CheckResult(
                name="pysam",
                passed=False,
                message="pysam not installed. Install with: pip install pysam",
            )

    def check_score_file(self) -> CheckResult:
        """Check the score file exists and has a tabix index next to it."""
        if self.score_file is None:
            return CheckResult(
                name="Score file",
                passed=False,
                message="No score file configured (use --scores or SVSCORE_SCORE_FILE)",
            )
        if not self.score_file.exists():
            return CheckResult(
                name="Score file",
                passed=False,
                message=f"Score file not found: {self.score_file}",
            )

        for suffix in INDEX_SUFFIXES:
            index = self.score_file.with_name(self.score_file.name + suffix)
            if index.exists():
                return CheckResult(name="Score file", passed=True, version=f"indexed ({suffix})")

        return CheckResult(
            name="Score file",
            passed=False,
            message=f"No tabix index for {self.score_file}. Run: tabix -s 1 -b 2 -e 2 {self.score_file}",
        )

    def check_gene_file(self) -> CheckResult:
        """Check the gene table can be opened and its first row parsed."""
        if self.gene_file is None or not self.gene_file.exists():
            return CheckResult(
                name="Gene table",
                passed=False,
                message=f"Gene table not found: {self.gene_file}",
            )

        try:
            with open_text(self.gene_file) as f:
                first = next((line for line in f if line.strip()), None)
            if first is not None:
                parse_gene_line(first, 1)
        except (SVScoreError, OSError, EOFError, UnicodeDecodeError) as e:
            return CheckResult(name="Gene table", passed=False, message=str(e))

        return CheckResult(name="Gene table", passed=True, version="readable")

    def check_all(self) -> list[CheckResult]:
        """Run all dependency checks.

        Returns:
            List of CheckResult for each dependency.
        """
        return [
            self.check_python(),
            self.check_pysam(),
            self.check_score_file(),
            self.check_gene_file(),
        ]

    def all_passed(self) -> bool:
        return all(r.passed for r in self.check_all())
