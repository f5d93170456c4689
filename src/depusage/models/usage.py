"""Data models for package usage evidence and the analysis report."""

from dataclasses import dataclass, field
from enum import Enum


class MigrationRisk(Enum):
    """Qualitative migration risk for a declared package."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class UsageEvidence:
    """How one file imports and calls one package."""

    import_statements: list[str] = field(default_factory=list)
    usage_snippets: list[str] = field(default_factory=list)
    symbols_touched: list[str] = field(default_factory=list)  # Insertion ordered, no duplicates
    line_numbers: list[int] = field(default_factory=list)
    complexity: int = 0

    def add_symbol(self, name: str) -> None:
        if name and name not in self.symbols_touched:
            self.symbols_touched.append(name)


@dataclass
class FileExtraction:
    """Everything the extractor learned from a single file."""

    file_name: str
    evidence: dict[str, UsageEvidence] = field(default_factory=dict)  # package -> evidence
    functions: int = 0
    classes: int = 0
    imports: int = 0
    decision_points: int = 0

    def evidence_for(self, package: str) -> UsageEvidence:
        """Get or create the evidence entry for a package."""
        if package not in self.evidence:
            self.evidence[package] = UsageEvidence()
        return self.evidence[package]


@dataclass
class FileUsage:
    """Per-file slice of a package usage record."""

    file_name: str
    import_statements: list[str] = field(default_factory=list)
    usage_examples: list[str] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "fileName": self.file_name,
            "importStatements": self.import_statements,
            "usageExamples": self.usage_examples,
            "lineNumbers": self.line_numbers,
        }


@dataclass
class PackageUsageRecord:
    """Aggregated usage of one declared dependency across the whole batch."""

    import_nodes: list[str] = field(default_factory=list)
    usage_nodes: list[str] = field(default_factory=list)
    exported_symbols: list[str] = field(default_factory=list)
    complexity_score: int = 0
    migration_risk: MigrationRisk = MigrationRisk.LOW
    file_usage: list[FileUsage] = field(default_factory=list)

    @property
    def is_used(self) -> bool:
        return bool(self.import_nodes or self.usage_nodes)

    def to_dict(self) -> dict:
        return {
            "importNodes": self.import_nodes,
            "usageNodes": self.usage_nodes,
            "exportedSymbols": self.exported_symbols,
            "complexityScore": self.complexity_score,
            "migrationRisk": self.migration_risk.value,
            "fileUsage": [fu.to_dict() for fu in self.file_usage],
        }


@dataclass
class CodeMetrics:
    """Structural counters accumulated over every successfully parsed file."""

    total_functions: int = 0
    total_classes: int = 0
    total_imports: int = 0
    cyclomatic_complexity: int = 0

    def to_dict(self) -> dict:
        return {
            "totalFunctions": self.total_functions,
            "totalClasses": self.total_classes,
            "totalImports": self.total_imports,
            "cyclomaticComplexity": self.cyclomatic_complexity,
        }


@dataclass
class ParseDiagnostic:
    """A file that could not be parsed and was skipped."""

    file_name: str
    grammar: str
    message: str
    line: int | None = None

    def to_dict(self) -> dict:
        return {
            "fileName": self.file_name,
            "grammar": self.grammar,
            "message": self.message,
            "line": self.line,
        }


@dataclass
class AnalysisReport:
    """The usage report handed back to the caller."""

    package_usage: dict[str, PackageUsageRecord] = field(default_factory=dict)
    code_metrics: CodeMetrics = field(default_factory=CodeMetrics)
    dependency_graph: dict[str, list[str]] = field(default_factory=dict)
    diagnostics: list[ParseDiagnostic] = field(default_factory=list)
    files_analyzed: int = 0

    @property
    def unused_packages(self) -> list[str]:
        return [name for name, record in self.package_usage.items() if not record.is_used]

    def to_dict(self) -> dict:
        return {
            "packageUsage": {
                name: record.to_dict() for name, record in self.package_usage.items()
            },
            "codeMetrics": self.code_metrics.to_dict(),
            "dependencyGraph": self.dependency_graph,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
