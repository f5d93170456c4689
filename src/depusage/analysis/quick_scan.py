"""Regex-based usage scan that needs no parser.

Coarser than the syntax tree analysis but works on any text, including
files that fail to parse. Reports which files import each declared
package, which methods appear to be called on it, and which declared
packages are never imported at all.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from depusage.analysis.resolver import COMMON_ALIASES, resolve_package_name
from depusage.analysis.scoring import RiskConfig, classify_risk
from depusage.models.quick_scan import QuickScanReport, QuickScanUsage
from depusage.models.source import SourceFile
from depusage.models.usage import MigrationRisk

IMPORT_PATTERNS = [
    re.compile(r"""import\s+.*?\s+from\s+['"`]([^'"`]+)['"`]"""),
    re.compile(r"""import\s+['"`]([^'"`]+)['"`]"""),
    re.compile(r"""require\s*\(\s*['"`]([^'"`]+)['"`]\s*\)"""),
]

# Packages whose wide API surface makes any migration harder
BROAD_API_PACKAGES = {"lodash", "moment", "jquery", "angular"}
BROAD_API_MULTIPLIER = 1.5


def _method_patterns(package: str, specifier: str) -> list[re.Pattern[str]]:
    """Patterns whose first group captures methods used from a package."""
    receivers = [alias for alias, target in COMMON_ALIASES.items() if target == package]
    if package not in receivers:
        receivers.append(package)

    patterns = [re.compile(rf"(?<![\w$]){re.escape(name)}\.(\w+)") for name in receivers]
    patterns.append(
        re.compile(rf"""\{{\s*([\w,\s]+)\s*\}}\s*from\s*['"`]{re.escape(specifier)}['"`]""")
    )
    return patterns


def extract_methods(content: str, package: str, specifier: str) -> list[str]:
    """Find method names used from a package, in first-seen order."""
    methods: list[str] = []
    for pattern in _method_patterns(package, specifier):
        for match in pattern.finditer(content):
            for method in match.group(1).split(","):
                method = method.strip()
                if method and method not in methods:
                    methods.append(method)
    return methods


def quick_scan(files: Sequence[SourceFile], dependencies: Mapping[str, str]) -> QuickScanReport:
    """Scan source text for imports and method usage of declared packages."""
    usage = {name: QuickScanUsage() for name in dependencies}
    used: set[str] = set()

    for file in files:
        for pattern in IMPORT_PATTERNS:
            for match in pattern.finditer(file.content):
                specifier = match.group(1)
                package = resolve_package_name(specifier)
                if package is None or package not in usage:
                    continue

                used.add(package)
                entry = usage[package]
                if file.name not in entry.files_using:
                    entry.files_using.append(file.name)
                entry.import_statements.append(match.group(0))

                for method in extract_methods(file.content, package, specifier):
                    if method not in entry.methods_used:
                        entry.methods_used.append(method)

    return QuickScanReport(
        package_usage=usage,
        unused_dependencies=[name for name in dependencies if name not in used],
        total_files=len(files),
    )


def migration_complexity(
    package: str,
    usage: QuickScanUsage,
    config: RiskConfig | None = None,
) -> MigrationRisk:
    """Risk level from quick scan counts: files x2, methods x1, imports x0.5."""
    score = (
        len(usage.files_using) * 2
        + len(usage.methods_used) * 1
        + len(usage.import_statements) * 0.5
    )
    if package in BROAD_API_PACKAGES:
        score *= BROAD_API_MULTIPLIER
    return classify_risk(score, config)
