"""depusage - dependency usage and migration risk analysis for JS/TS projects."""

__version__ = "0.1.0"

from depusage.analysis.engine import analyze_sources
from depusage.analysis.quick_scan import quick_scan
from depusage.models.source import SourceFile

__all__ = ["SourceFile", "__version__", "analyze_sources", "quick_scan"]
