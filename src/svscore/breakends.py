"""Pairing of the two VCF lines that describe one BND junction."""

import logging
import re
from dataclasses import dataclass

from .errors import MalformedRecordError
from .models import Breakpoints, VariantRecord

logger = logging.getLogger(__name__)

MATE_ID_PATTERN = re.compile(r"(\d+)_(?:1|2)")


def mate_key(record_id: str) -> str:
    """Numeric junction id shared by both mates (``7`` for ``7_1`` and ``7_2``)."""
    match = MATE_ID_PATTERN.search(record_id)
    if match is None:
        raise MalformedRecordError(
            f"BND id '{record_id}' does not follow the <number>_<1|2> convention"
        )
    return match.group(1)


@dataclass
class BreakendPair:
    """Both lines of a BND junction and the breakpoints resolved from them.

    ``current`` is the line that completed the pair, ``mate`` the one
    stored earlier.
    """

    current: VariantRecord
    mate: VariantRecord
    breakpoints: Breakpoints


def resolve_pair(current: VariantRecord, mate: VariantRecord) -> Breakpoints:
    """Orient a BND pair into left and right breakpoints.

    When the current line lacks SECONDARY, the mate provides the left
    breakpoint and its Gene/Intron annotations, the current line becomes
    the right side, and the current CIPOS/CIEND swap roles. Otherwise the
    current line is left and the mate provides the right side.
    """
    if not current.is_secondary:
        return Breakpoints(
            left_chrom=mate.chrom,
            left_pos=mate.pos,
            right_chrom=current.chrom,
            right_pos=current.pos,
            cipos=current.ciend,
            ciend=current.cipos,
            left_genes=mate.info.get_list("Gene"),
            right_genes=current.info.get_list("right_Gene"),
            left_introns=mate.info.get_list("Intron"),
            right_introns=current.info.get_list("right_Intron"),
        )

    return Breakpoints(
        left_chrom=current.chrom,
        left_pos=current.pos,
        right_chrom=mate.chrom,
        right_pos=mate.pos,
        cipos=current.cipos,
        ciend=current.ciend,
        left_genes=current.info.get_list("left_Gene"),
        right_genes=mate.info.get_list("Gene"),
        left_introns=current.info.get_list("left_Intron"),
        right_introns=mate.info.get_list("Intron"),
    )


class BreakendPairer:
    """Hold the first line of each BND junction until its mate arrives."""

    def __init__(self):
        self._pending: dict[str, VariantRecord] = {}

    def offer(self, record: VariantRecord) -> BreakendPair | None:
        """Store a first sighting, or return the completed pair.

        A junction id is removed once paired.
        """
        key = mate_key(record.id)
        mate = self._pending.pop(key, None)
        if mate is None:
            self._pending[key] = record
            return None

        return BreakendPair(
            current=record,
            mate=mate,
            breakpoints=resolve_pair(record, mate),
        )

    @property
    def pending(self) -> list[str]:
        """Junction ids still waiting for a mate."""
        return list(self._pending)

    def discard(self) -> list[VariantRecord]:
        """Drop unpaired lines at the end of a run and return them."""
        unpaired = list(self._pending.values())
        if unpaired:
            logger.debug(
                "Dropping %d unpaired breakend(s): %s",
                len(unpaired),
                ", ".join(r.id for r in unpaired),
            )
        self._pending.clear()
        return unpaired

    def __len__(self) -> int:
        return len(self._pending)
