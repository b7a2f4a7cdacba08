"""Exceptions raised while annotating structural variants.

Every error here aborts the run. Output is buffered until all input has
been scored, so raising any of these means no data line is written.
"""


class SVScoreError(Exception):
    """Base class for fatal annotation errors."""

    pass


class InputFileError(SVScoreError):
    """Raised when a required input (VCF, gene table) cannot be opened."""

    pass


class MalformedRecordError(SVScoreError):
    """Raised when a VCF data line cannot be parsed."""

    pass


class UnsupportedSVTypeError(MalformedRecordError):
    """Raised for an SVTYPE outside DEL, DUP, INV, BND and INS."""

    def __init__(self, svtype: str | None, variant_number: int):
        self.svtype = svtype
        self.variant_number = variant_number
        super().__init__(
            f"Unrecognized SVTYPE {svtype} at variant {variant_number} of annotated VCF file"
        )


class ScoreSourceError(SVScoreError):
    """Raised when the per-base score source cannot be opened or queried."""

    pass


class GeneNotFoundError(SVScoreError):
    """Raised when a gene annotated on a variant is missing from the gene table."""

    def __init__(self, symbol: str, chrom: str):
        self.symbol = symbol
        self.chrom = chrom
        super().__init__(
            f"Gene {symbol} on chromosome {chrom} not found in gene table; "
            "check that the gene table matches the annotation genome build"
        )
