"""Data models for the regex-based quick usage scan."""

from dataclasses import dataclass, field


@dataclass
class QuickScanUsage:
    """Text-level usage of one declared package."""

    files_using: list[str] = field(default_factory=list)
    methods_used: list[str] = field(default_factory=list)
    import_statements: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "filesUsing": self.files_using,
            "methodsUsed": self.methods_used,
            "importStatements": self.import_statements,
        }


@dataclass
class QuickScanReport:
    """Result of scanning a batch of files with import regexes."""

    package_usage: dict[str, QuickScanUsage] = field(default_factory=dict)
    unused_dependencies: list[str] = field(default_factory=list)
    total_files: int = 0

    def to_dict(self) -> dict:
        return {
            "packageUsage": {
                name: usage.to_dict() for name, usage in self.package_usage.items()
            },
            "unusedDependencies": self.unused_dependencies,
            "totalFiles": self.total_files,
        }
