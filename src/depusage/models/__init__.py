"""Data models for depusage."""

from depusage.models.quick_scan import QuickScanReport, QuickScanUsage
from depusage.models.results import AnalysisMetadata, AnalysisResults
from depusage.models.source import Grammar, ParsedUnit, SourceFile
from depusage.models.usage import (
    AnalysisReport,
    CodeMetrics,
    FileExtraction,
    FileUsage,
    MigrationRisk,
    PackageUsageRecord,
    ParseDiagnostic,
    UsageEvidence,
)

__all__ = [
    # Source models
    "Grammar",
    "ParsedUnit",
    "SourceFile",
    # Usage models
    "AnalysisReport",
    "CodeMetrics",
    "FileExtraction",
    "FileUsage",
    "MigrationRisk",
    "PackageUsageRecord",
    "ParseDiagnostic",
    "UsageEvidence",
    # Quick scan models
    "QuickScanReport",
    "QuickScanUsage",
    # Results models
    "AnalysisMetadata",
    "AnalysisResults",
]
