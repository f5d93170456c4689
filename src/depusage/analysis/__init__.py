"""Analysis modules for dependency usage detection."""

from depusage.analysis.aggregator import UsageAggregator, aggregate
from depusage.analysis.engine import analyze_sources, process_file
from depusage.analysis.extractor import UsageExtractor, extract_usage
from depusage.analysis.parser import GRAMMARS, parse_source
from depusage.analysis.quick_scan import migration_complexity, quick_scan
from depusage.analysis.resolver import (
    COMMON_ALIASES,
    map_identifier,
    normalize_name,
    resolve_package_name,
)
from depusage.analysis.scoring import RiskConfig, RiskScorer, classify_risk

__all__ = [
    "COMMON_ALIASES",
    "GRAMMARS",
    "RiskConfig",
    "RiskScorer",
    "UsageAggregator",
    "UsageExtractor",
    "aggregate",
    "analyze_sources",
    "classify_risk",
    "extract_usage",
    "map_identifier",
    "migration_complexity",
    "normalize_name",
    "parse_source",
    "process_file",
    "quick_scan",
    "resolve_package_name",
]
