"""Buffering and final ordering of annotated VCF data lines."""

from typing import IO

from .models import OutputLine, ScoredVariant, VariantRecord


class OutputAssembler:
    """Collect annotated lines and emit them sorted by (chrom, pos).

    Chromosomes compare as plain strings, so "10" is written before "2".
    Lines with equal keys keep the order in which they were added.
    """

    def __init__(self, include_span: bool = False):
        self.include_span = include_span
        self._lines: list[OutputLine] = []

    def add(self, scored: ScoredVariant) -> None:
        """Buffer the scored record and, for BND, its mate with the same fields."""
        self._append(scored, scored.record)
        if scored.mate is not None:
            self._append(scored, scored.mate)

    def _append(self, scored: ScoredVariant, record: VariantRecord) -> None:
        info = scored.render_info(record, self.include_span)
        self._lines.append(OutputLine(text=record.with_info(info), chrom=record.chrom, pos=record.pos))

    def lines(self) -> list[str]:
        return [line.text for line in sorted(self._lines, key=lambda line: line.sort_key)]

    def write(self, out: IO[str]) -> int:
        """Write the sorted lines and return how many were written."""
        lines = self.lines()
        for text in lines:
            out.write(text + "\n")
        return len(lines)

    def clear(self) -> None:
        self._lines.clear()

    def __len__(self) -> int:
        return len(self._lines)
