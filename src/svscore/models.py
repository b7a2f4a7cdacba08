"""Data models for structural variant records and their scores."""

import math
import re
from dataclasses import dataclass, field

from .errors import MalformedRecordError

SVTYPE_PATTERN = re.compile(r"\w{3}")

# Fixed VCF column positions
CHROM_COL = 0
POS_COL = 1
ID_COL = 2
REF_COL = 3
ALT_COL = 4
INFO_COL = 7
MIN_COLUMNS = 8

SCORE_PREFIX = "SVSCORE_"


def format_number(value: float) -> str:
    """Render a score the way it appears in the INFO column (35, 0.25, -1)."""
    if math.isfinite(value) and value == int(value) and abs(value) < 1e15:
        return str(int(value))
    return f"{value:.15g}"


class InfoField:
    """Ordered key/value view over a VCF INFO column.

    Entries without ``=`` are flags. When a key repeats, the first
    occurrence wins.
    """

    def __init__(self, raw: str):
        self.raw = raw
        self._values: dict[str, str | None] = {}
        if raw in ("", "."):
            return
        for entry in raw.split(";"):
            if not entry:
                continue
            key, sep, value = entry.partition("=")
            if key in self._values:
                continue
            self._values[key] = value if sep else None

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __iter__(self):
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for ``key``; flags and ``KEY=`` both give ``""``."""
        if key not in self._values:
            return default
        value = self._values[key]
        return "" if value is None else value

    def has_flag(self, key: str) -> bool:
        return key in self._values

    def get_list(self, key: str) -> list[str]:
        """Comma-split value, empty when the key is absent or empty."""
        value = self.get(key)
        if not value:
            return []
        return [item for item in value.split(",") if item]

    def get_int(self, key: str) -> int | None:
        value = self.get(key)
        if not value:
            return None
        return int(value)

    def get_interval(self, key: str) -> tuple[int, int]:
        """Parse a two-value confidence interval such as ``CIPOS=-10,10``."""
        parts = self.get_list(key)
        if not parts:
            return (0, 0)
        low = int(parts[0])
        high = int(parts[1]) if len(parts) > 1 else 0
        return (low, high)

    def to_dict(self) -> dict[str, str | bool]:
        return {k: (True if v is None else v) for k, v in self._values.items()}


@dataclass
class VariantRecord:
    """Represents a single data line of an annotated SV VCF."""

    chrom: str
    pos: int
    id: str
    ref: str
    alt: str
    info: InfoField
    fields: list[str]
    variant_number: int = 0

    @classmethod
    def from_line(cls, line: str, variant_number: int = 0) -> "VariantRecord":
        """Split a data line on whitespace and extract the fixed columns."""
        fields = line.split()
        if len(fields) < MIN_COLUMNS:
            raise MalformedRecordError(
                f"Expected at least {MIN_COLUMNS} columns at variant {variant_number}, "
                f"got {len(fields)}"
            )
        try:
            pos = int(fields[POS_COL])
        except ValueError:
            raise MalformedRecordError(
                f"Invalid POS '{fields[POS_COL]}' at variant {variant_number}"
            ) from None

        return cls(
            chrom=fields[CHROM_COL],
            pos=pos,
            id=fields[ID_COL],
            ref=fields[REF_COL],
            alt=fields[ALT_COL],
            info=InfoField(fields[INFO_COL]),
            fields=fields,
            variant_number=variant_number,
        )

    @property
    def svtype(self) -> str | None:
        """Three-character SV type code, or None when SVTYPE is missing."""
        value = self.info.get("SVTYPE")
        if not value:
            return None
        match = SVTYPE_PATTERN.match(value)
        return match.group(0) if match else None

    @property
    def cipos(self) -> tuple[int, int]:
        return self._interval("CIPOS")

    @property
    def ciend(self) -> tuple[int, int]:
        return self._interval("CIEND")

    @property
    def end(self) -> int:
        """END position; records without END end at POS."""
        try:
            end = self.info.get_int("END")
        except ValueError:
            raise MalformedRecordError(
                f"Invalid END '{self.info.get('END')}' at variant {self.variant_number}"
            ) from None
        return self.pos if end is None else end

    @property
    def is_secondary(self) -> bool:
        return self.info.has_flag("SECONDARY")

    def _interval(self, key: str) -> tuple[int, int]:
        try:
            return self.info.get_interval(key)
        except ValueError:
            raise MalformedRecordError(
                f"Invalid {key} '{self.info.get(key)}' at variant {self.variant_number}"
            ) from None

    def with_info(self, info: str) -> str:
        """Tab-join all columns in original order with INFO replaced."""
        fields = list(self.fields)
        fields[INFO_COL] = info
        return "\t".join(fields)


@dataclass(frozen=True)
class GeneRecord:
    """Merged coordinates of one gene symbol on one chromosome."""

    symbol: str
    chrom: str
    start: int
    stop: int
    strand: str


@dataclass(frozen=True)
class NumericScore:
    """A maximum score returned by the score source (-1 when no data).

    ``text`` is the score as written in the score file; it is echoed on
    output so values such as ``0.198090`` are not reformatted.
    """

    value: float
    text: str | None = field(default=None, compare=False)

    def __str__(self) -> str:
        if self.text is not None:
            return self.text
        return format_number(self.value)


@dataclass(frozen=True)
class SentinelScore:
    """A symbolic score label such as ``INS`` or ``INVNoGenes``."""

    label: str

    def __str__(self) -> str:
        return self.label


Score = NumericScore | SentinelScore


@dataclass
class ScoredVariant:
    """A variant (and its BND mate, if any) with computed score fields.

    ``scores`` holds the fields appended to INFO in order. ``span`` is the
    span score; for INV, BND and INS it is symbolic and only serialized on
    request.
    """

    record: VariantRecord
    scores: dict[str, Score] = field(default_factory=dict)
    span: Score | None = None
    mate: VariantRecord | None = None

    def info_fields(self, include_span: bool = False) -> list[str]:
        """Return ``SVSCORE_<NAME>=<value>`` entries in output order."""
        entries = []
        if include_span and "SPAN" not in self.scores and self.span is not None:
            entries.append(f"{SCORE_PREFIX}SPAN={self.span}")
        for name, score in self.scores.items():
            entries.append(f"{SCORE_PREFIX}{name}={score}")
        return entries

    def render_info(self, record: VariantRecord, include_span: bool = False) -> str:
        """Append the score entries to a record's original INFO text."""
        appended = ";".join(self.info_fields(include_span))
        if record.info.raw in ("", "."):
            return appended
        return f"{record.info.raw};{appended}"


@dataclass
class OutputLine:
    """A finalized VCF data line plus its position for final ordering."""

    text: str
    chrom: str
    pos: int

    @property
    def sort_key(self) -> tuple[str, int]:
        # Plain string comparison of chromosome names: "10" sorts before "2"
        return (self.chrom, self.pos)


@dataclass
class Breakpoints:
    """Resolved left and right breakpoints of a variant.

    Intervals are 1-based and inclusive: ``pos + CI_low - 1`` to
    ``pos + CI_high``.
    """

    left_chrom: str
    left_pos: int
    right_chrom: str
    right_pos: int
    cipos: tuple[int, int] = (0, 0)
    ciend: tuple[int, int] = (0, 0)
    left_genes: list[str] = field(default_factory=list)
    right_genes: list[str] = field(default_factory=list)
    left_introns: list[str] = field(default_factory=list)
    right_introns: list[str] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: VariantRecord) -> "Breakpoints":
        """Breakpoints of a non-BND record: POS on the left, END on the right."""
        return cls(
            left_chrom=record.chrom,
            left_pos=record.pos,
            right_chrom=record.chrom,
            right_pos=record.end,
            cipos=record.cipos,
            ciend=record.ciend,
            left_genes=record.info.get_list("left_Gene"),
            right_genes=record.info.get_list("right_Gene"),
            left_introns=record.info.get_list("left_Intron"),
            right_introns=record.info.get_list("right_Intron"),
        )

    @property
    def left_start(self) -> int:
        return self.left_pos + self.cipos[0] - 1

    @property
    def left_stop(self) -> int:
        return self.left_pos + self.cipos[1]

    @property
    def right_start(self) -> int:
        return self.right_pos + self.ciend[0] - 1

    @property
    def right_stop(self) -> int:
        return self.right_pos + self.ciend[1]
