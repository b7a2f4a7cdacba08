"""Gene coordinate table used for truncation scoring."""

import logging
from collections.abc import Iterable
from pathlib import Path

from .errors import GeneNotFoundError, InputFileError, MalformedRecordError
from .models import GeneRecord
from .vcf_parser import open_text

logger = logging.getLogger(__name__)

STRANDS = {"+", "-"}


def parse_gene_line(line: str, line_number: int = 0) -> GeneRecord | None:
    """Parse one row of the gene file.

    Expected columns: chrom, start, stop, strand, symbol. Rows written as
    chrom, start, stop, symbol, strand are recognised by where the strand
    sits. Blank lines give None.
    """
    fields = line.split()
    if not fields:
        return None
    if len(fields) < 5:
        raise MalformedRecordError(
            f"Gene table line {line_number}: expected 5 columns, got {len(fields)}"
        )

    chrom, start, stop, strand, symbol = fields[:5]
    if strand not in STRANDS and symbol in STRANDS:
        strand, symbol = symbol, strand

    try:
        return GeneRecord(
            symbol=symbol,
            chrom=chrom,
            start=int(start),
            stop=int(stop),
            strand=strand,
        )
    except ValueError:
        raise MalformedRecordError(
            f"Gene table line {line_number}: invalid coordinates {start}-{stop}"
        ) from None


class GeneTable:
    """Index of gene symbol -> chromosome -> merged interval and strand.

    Repeated rows for the same symbol and chromosome (one per transcript)
    widen the stored interval to the outermost start and stop. The strand
    of the first row is kept.
    """

    def __init__(self):
        self._genes: dict[str, dict[str, GeneRecord]] = {}

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "GeneTable":
        table = cls()
        for line_number, line in enumerate(lines, start=1):
            record = parse_gene_line(line, line_number)
            if record is not None:
                table.add(record)
        return table

    @classmethod
    def from_file(cls, path: Path | str) -> "GeneTable":
        """Load a tab-delimited gene file (optionally gzipped).

        Raises:
            InputFileError: If the file cannot be opened.
        """
        path = Path(path)
        if not path.exists():
            raise InputFileError(f"Could not open gene table {path}: file not found")

        with open_text(path) as f:
            try:
                table = cls.from_lines(f)
            except (UnicodeDecodeError, OSError, EOFError) as e:
                raise InputFileError(f"Could not read gene table {path}: {e}") from e

        logger.info("Loaded %d genes from %s", len(table), path.name)
        return table

    def add(self, record: GeneRecord) -> None:
        by_chrom = self._genes.setdefault(record.symbol, {})
        existing = by_chrom.get(record.chrom)
        if existing is None:
            by_chrom[record.chrom] = record
            return

        by_chrom[record.chrom] = GeneRecord(
            symbol=existing.symbol,
            chrom=existing.chrom,
            start=min(existing.start, record.start),
            stop=max(existing.stop, record.stop),
            strand=existing.strand,
        )

    def lookup(self, symbol: str, chrom: str) -> GeneRecord:
        """Return the merged record for a gene on a chromosome.

        Raises:
            GeneNotFoundError: If the symbol is not on that chromosome.
        """
        try:
            return self._genes[symbol][chrom]
        except KeyError:
            raise GeneNotFoundError(symbol, chrom) from None

    def get(self, symbol: str, chrom: str) -> GeneRecord | None:
        return self._genes.get(symbol, {}).get(chrom)

    def __contains__(self, key: tuple[str, str]) -> bool:
        symbol, chrom = key
        return chrom in self._genes.get(symbol, {})

    def __len__(self) -> int:
        return len(self._genes)
