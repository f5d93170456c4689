"""Data models for the results file written by the CLI."""

from dataclasses import dataclass
from datetime import datetime

from depusage.models.quick_scan import QuickScanReport
from depusage.models.usage import AnalysisReport


@dataclass
class AnalysisMetadata:
    """Metadata about the analysis run."""

    project: str
    analyzed_at: datetime
    depusage_version: str
    files_analyzed: int
    files_failed: int
    dependencies: int
    analysis_duration_ms: int

    def to_dict(self) -> dict:
        return {
            "project": self.project,
            "analyzedAt": self.analyzed_at.isoformat(),
            "depusageVersion": self.depusage_version,
            "filesAnalyzed": self.files_analyzed,
            "filesFailed": self.files_failed,
            "dependencies": self.dependencies,
            "analysisDurationMs": self.analysis_duration_ms,
        }


@dataclass
class AnalysisResults:
    """Complete results: run metadata, the usage report and the optional quick scan."""

    version: str = "1.0"
    metadata: AnalysisMetadata | None = None
    report: AnalysisReport | None = None
    quick_scan: QuickScanReport | None = None

    def to_dict(self) -> dict:
        result: dict = {"version": self.version}

        if self.metadata:
            result["metadata"] = self.metadata.to_dict()

        if self.report:
            result["report"] = self.report.to_dict()

        if self.quick_scan:
            result["quickScan"] = self.quick_scan.to_dict()

        return result
