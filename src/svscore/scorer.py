"""Per-SV-type scoring of breakpoint, span and gene truncation intervals."""

import logging

from .breakends import BreakendPair
from .errors import UnsupportedSVTypeError
from .genes import GeneTable
from .models import (
    Breakpoints,
    NumericScore,
    ScoredVariant,
    SentinelScore,
    VariantRecord,
)
from .score_source import IntervalScoreOracle

logger = logging.getLogger(__name__)

DEFAULT_MAX_SPAN = 1_000_000
# Reported instead of querying spans longer than max_span
OVERSIZED_SPAN = SentinelScore("100")

SPAN_TYPES = {"DEL", "DUP"}
JUNCTION_TYPES = {"INV", "BND"}
SUPPORTED_TYPES = SPAN_TYPES | JUNCTION_TYPES | {"INS"}


def introns_match(left_introns: list[str], right_introns: list[str]) -> bool:
    """True when both breakends fall in the same, nonempty set of introns."""
    return bool(right_introns) and set(left_introns) == set(right_introns)


class SVScorer:
    """Compute SVSCORE fields for DEL, DUP, INV, BND and INS variants."""

    def __init__(
        self,
        genes: GeneTable,
        oracle: IntervalScoreOracle,
        max_span: int = DEFAULT_MAX_SPAN,
    ):
        self.genes = genes
        self.oracle = oracle
        self.max_span = max_span

    def score(self, record: VariantRecord) -> ScoredVariant:
        """Score a non-BND record.

        Raises:
            UnsupportedSVTypeError: For BND (use score_pair) or an unknown SVTYPE.
        """
        svtype = record.svtype
        if svtype not in SUPPORTED_TYPES or svtype == "BND":
            raise UnsupportedSVTypeError(svtype, record.variant_number)

        breakpoints = Breakpoints.from_record(record)
        if svtype in SPAN_TYPES:
            return self._score_span(record, breakpoints)
        if svtype == "INS":
            return self._score_insertion(record, breakpoints)
        return self._score_junction(record, svtype, breakpoints)

    def score_pair(self, pair: BreakendPair) -> ScoredVariant:
        """Score a completed BND pair; both lines carry the same fields."""
        scored = self._score_junction(pair.current, "BND", pair.breakpoints)
        scored.mate = pair.mate
        return scored

    def _score_span(self, record: VariantRecord, bp: Breakpoints) -> ScoredVariant:
        if bp.right_stop - bp.left_start > self.max_span:
            span = OVERSIZED_SPAN
        else:
            span = self.oracle.score(bp.left_chrom, bp.left_start, bp.right_stop)

        left = self.oracle.score(bp.left_chrom, bp.left_start, bp.left_stop)
        right = self.oracle.score(bp.right_chrom, bp.right_start, bp.right_stop)
        return ScoredVariant(
            record=record,
            scores={"SPAN": span, "LEFT": left, "RIGHT": right},
            span=span,
        )

    def _score_insertion(self, record: VariantRecord, bp: Breakpoints) -> ScoredVariant:
        # Single bases flanking the insertion point
        before = bp.left_start - 1
        after = bp.right_start + 1
        left = self.oracle.score(bp.left_chrom, before, before)
        right = self.oracle.score(bp.right_chrom, after, after)
        return ScoredVariant(
            record=record,
            scores={"LEFT": left, "RIGHT": right},
            span=SentinelScore("INS"),
        )

    def _score_junction(
        self, record: VariantRecord, svtype: str, bp: Breakpoints
    ) -> ScoredVariant:
        logger.debug("Left: %s: %d-%d", bp.left_chrom, bp.left_start, bp.left_stop)
        left = self.oracle.score(bp.left_chrom, bp.left_start, bp.left_stop)
        logger.debug("Right: %s: %d-%d", bp.right_chrom, bp.right_start, bp.right_stop)
        right = self.oracle.score(bp.right_chrom, bp.right_start, bp.right_stop)

        scored = ScoredVariant(record=record, scores={"LEFT": left, "RIGHT": right})

        same_introns = introns_match(bp.left_introns, bp.right_introns)
        no_genes = not bp.left_genes and not bp.right_genes
        if no_genes or (svtype == "INV" and same_introns):
            suffix = "SameIntrons" if same_introns else "NoGenes"
            scored.span = SentinelScore(f"{svtype}{suffix}")
            return scored

        ltrunc = self.truncation_score(bp.left_genes, bp.left_chrom, bp.left_start, bp.left_stop)
        rtrunc = self.truncation_score(
            bp.right_genes, bp.right_chrom, bp.right_start, bp.right_stop
        )
        if ltrunc is not None:
            scored.scores["LTRUNC"] = ltrunc
        if rtrunc is not None:
            scored.scores["RTRUNC"] = rtrunc
        return scored

    def truncation_score(
        self, gene_names: list[str], chrom: str, start: int, stop: int
    ) -> NumericScore | None:
        """Maximum score over the portions of genes disrupted by a breakend.

        On the + strand the disrupted portion runs from the breakend (or gene
        start, whichever is further right) to the gene end; on the - strand
        from the gene start to the breakend (or gene end, whichever is
        further left). Returns None when no genes are given.

        Raises:
            GeneNotFoundError: If a gene is missing from the gene table.
        """
        scores = []
        for name in gene_names:
            gene = self.genes.lookup(name, chrom)
            if gene.strand == "+":
                trunc_start, trunc_stop = max(gene.start, start), gene.stop
            else:
                trunc_start, trunc_stop = gene.start, min(gene.stop, stop)
            logger.debug("Truncation %s: %s: %d-%d", name, chrom, trunc_start, trunc_stop)
            scores.append(self.oracle.score(chrom, trunc_start, trunc_stop))
        return max(scores, key=lambda score: score.value) if scores else None
