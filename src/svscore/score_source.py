"""Interval queries against a tabix-indexed per-base score file.

The score file (for example CADD ``whole_genome_SNVs.tsv.gz``) is
bgzip-compressed and tabix-indexed. Each row carries a comma-separated list
of numeric scores in one whitespace-delimited column (the 5th by default).
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

import pysam

from .errors import ScoreSourceError
from .models import NumericScore

logger = logging.getLogger(__name__)

NO_SCORE = -1.0
DEFAULT_SCORE_COLUMN = 4


class ScoreSource(Protocol):
    """Protocol for anything that returns score rows for a genomic region."""

    def fetch(self, chrom: str, start: int, stop: int) -> Iterable[str]:
        """Return raw rows overlapping a 1-based inclusive region."""
        ...


class TabixScoreSource:
    """Score rows read from a bgzip/tabix file through pysam."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        try:
            self._tabix = pysam.TabixFile(str(self.path))
        except (OSError, ValueError) as e:
            raise ScoreSourceError(f"Could not open score file {self.path}: {e}") from e
        self._contigs = set(self._tabix.contigs)

    def fetch(self, chrom: str, start: int, stop: int) -> list[str]:
        # Regions on contigs missing from the index, or ending before base 1, have no data
        if chrom not in self._contigs or stop < 1:
            return []
        try:
            return list(self._tabix.fetch(chrom, max(start - 1, 0), stop))
        except (OSError, ValueError) as e:
            raise ScoreSourceError(
                f"Score query {chrom}:{start}-{stop} failed on {self.path}: {e}"
            ) from e

    def close(self) -> None:
        self._tabix.close()

    def __enter__(self) -> "TabixScoreSource":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def score_tokens(row: str, score_column: int = DEFAULT_SCORE_COLUMN) -> list[tuple[float, str]]:
    """Extract the comma-separated scores of one row as (value, text) pairs."""
    fields = row.split()
    if len(fields) <= score_column:
        raise ScoreSourceError(
            f"Score row has {len(fields)} columns, expected a score in column {score_column + 1}: "
            f"{row.strip()!r}"
        )
    try:
        return [(float(text), text) for text in fields[score_column].split(",") if text]
    except ValueError:
        raise ScoreSourceError(f"Non-numeric score in row: {row.strip()!r}") from None


def parse_scores(row: str, score_column: int = DEFAULT_SCORE_COLUMN) -> list[float]:
    """Extract the comma-separated scores from one score-file row."""
    return [value for value, _ in score_tokens(row, score_column)]


class IntervalScoreOracle:
    """Maximum score over a genomic interval.

    Each call issues one query to the score source unless ``cache`` is set,
    in which case results are kept per (chrom, start, stop) for the life
    of the oracle. Intervals without rows score NO_SCORE (-1), as do
    inverted intervals and intervals ending before the first base.
    """

    def __init__(
        self,
        source: ScoreSource,
        score_column: int = DEFAULT_SCORE_COLUMN,
        cache: bool = False,
    ):
        self.source = source
        self.score_column = score_column
        self.queries = 0
        self._cache: dict[tuple[str, int, int], NumericScore] | None = {} if cache else None

    def score(self, chrom: str, start: int, stop: int) -> NumericScore:
        """Return the maximum score in the 1-based inclusive [start, stop].

        The result keeps the score file's text for that value. Ties keep
        the first value seen.
        """
        # Nothing lies before position 1
        if stop < start or stop < 1:
            return NumericScore(NO_SCORE)

        key = (chrom, start, stop)
        if self._cache is not None and key in self._cache:
            return self._cache[key]

        logger.debug("Querying scores for %s:%d-%d", chrom, start, stop)
        self.queries += 1
        best: NumericScore | None = None
        for row in self.source.fetch(chrom, start, stop):
            for value, text in score_tokens(row, self.score_column):
                if best is None or value > best.value:
                    best = NumericScore(value, text)

        result = best if best is not None else NumericScore(NO_SCORE)
        if self._cache is not None:
            self._cache[key] = result
        return result

    def max_score(self, chrom: str, start: int, stop: int) -> float:
        """Numeric maximum in [start, stop], NO_SCORE when there is no data."""
        return self.score(chrom, start, stop).value

    def clear(self) -> None:
        if self._cache is not None:
            self._cache.clear()
