"""svscore: interval-based pathogenicity scoring of structural variants."""

__version__ = "0.2.0"

from .annotator import AnnotationContext, AnnotationSummary, SVAnnotator, annotate_vcf
from .breakends import BreakendPairer
from .config import AnnotateConfig, load_config
from .genes import GeneTable
from .models import NumericScore, ScoredVariant, SentinelScore, VariantRecord
from .output import OutputAssembler
from .score_source import IntervalScoreOracle, TabixScoreSource
from .scorer import SVScorer

__all__ = [
    "AnnotateConfig",
    "AnnotationContext",
    "AnnotationSummary",
    "BreakendPairer",
    "GeneTable",
    "IntervalScoreOracle",
    "NumericScore",
    "OutputAssembler",
    "SVAnnotator",
    "SVScorer",
    "ScoredVariant",
    "SentinelScore",
    "TabixScoreSource",
    "VariantRecord",
    "__version__",
    "annotate_vcf",
    "load_config",
]
