"""Merging per-file extraction results into per-package usage records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from depusage.models.usage import (
    CodeMetrics,
    FileExtraction,
    FileUsage,
    PackageUsageRecord,
    UsageEvidence,
)

DEFAULT_USAGE_EXAMPLE_CAP = 10


@dataclass
class UsageAggregator:
    """Accumulates file results, in the order they are added, into one report.

    This is the only place package records are mutated, so extraction can
    run in parallel as long as files are added here sequentially.
    """

    declared: Mapping[str, str]
    example_cap: int = DEFAULT_USAGE_EXAMPLE_CAP

    records: dict[str, PackageUsageRecord] = field(default_factory=dict)
    metrics: CodeMetrics = field(default_factory=CodeMetrics)

    # package -> other packages seen in the same files
    graph: dict[str, list[str]] = field(default_factory=dict)

    files_added: int = 0

    def __post_init__(self) -> None:
        # Every declared package gets a record, used or not
        for name in self.declared:
            self.records[name] = PackageUsageRecord()

    def add_file(self, extraction: FileExtraction) -> None:
        """Merge one file's extraction into the records and metrics."""
        self.files_added += 1

        self.metrics.total_functions += extraction.functions
        self.metrics.total_classes += extraction.classes
        self.metrics.total_imports += extraction.imports
        self.metrics.cyclomatic_complexity += extraction.decision_points + 1

        packages: list[str] = []
        for package, evidence in extraction.evidence.items():
            record = self.records.get(package)
            if record is None:
                continue  # Not declared: never attributed
            self._merge_evidence(record, extraction.file_name, evidence)
            packages.append(package)

        self._add_edges(packages)

    def _merge_evidence(
        self,
        record: PackageUsageRecord,
        file_name: str,
        evidence: UsageEvidence,
    ) -> None:
        record.import_nodes.extend(evidence.import_statements)
        record.usage_nodes.extend(evidence.usage_snippets)
        for symbol in evidence.symbols_touched:
            if symbol not in record.exported_symbols:
                record.exported_symbols.append(symbol)
        record.complexity_score += evidence.complexity

        record.file_usage.append(
            FileUsage(
                file_name=file_name,
                import_statements=list(evidence.import_statements),
                usage_examples=evidence.usage_snippets[: self.example_cap],
                line_numbers=list(evidence.line_numbers),
            )
        )

    def _add_edges(self, packages: list[str]) -> None:
        """Link every package used in a file to the others used alongside it."""
        for package in packages:
            edges = self.graph.setdefault(package, [])
            for other in packages:
                if other != package and other not in edges:
                    edges.append(other)


def aggregate(
    per_file: Iterable[FileExtraction],
    declared: Mapping[str, str],
    example_cap: int = DEFAULT_USAGE_EXAMPLE_CAP,
) -> dict[str, PackageUsageRecord]:
    """Merge file extractions into one usage record per declared package."""
    aggregator = UsageAggregator(declared, example_cap=example_cap)
    for extraction in per_file:
        aggregator.add_file(extraction)
    return aggregator.records
