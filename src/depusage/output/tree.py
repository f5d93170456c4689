"""Rich tree visualization for package usage results."""

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

console = Console()

RISK_ORDER = {"high": 0, "medium": 1, "low": 2}
RISK_LEVELS = ("low", "medium", "high")


def risk_color(risk: str) -> str:
    """Get color based on migration risk level."""
    return {"high": "red", "medium": "yellow", "low": "green"}.get(risk, "white")


def meets_min_risk(risk: str, min_risk: str) -> bool:
    """Check whether a risk level is at or above a minimum level."""
    return RISK_ORDER.get(risk, 2) <= RISK_ORDER.get(min_risk, 2)


def build_usage_tree(
    report: dict,
    min_risk: str = "low",
    max_examples: int = 3,
) -> Tree:
    """Build a Rich tree showing each used package, its files and call sites.

    Args:
        report: Report in its serialized (``AnalysisReport.to_dict``) form
        min_risk: Only show packages at this risk level or higher
        max_examples: Usage examples shown per file
    """
    package_usage: dict = report.get("packageUsage", {})

    root = Tree("[bold]Package usage[/]", guide_style="dim")

    packages = sorted(
        package_usage.items(),
        key=lambda item: (RISK_ORDER.get(item[1].get("migrationRisk", "low"), 2), item[0]),
    )

    for name, record in packages:
        risk = record.get("migrationRisk", "low")
        if not meets_min_risk(risk, min_risk):
            continue
        file_usage = record.get("fileUsage", [])
        if not file_usage:
            continue

        label = Text()
        label.append(name, style="bold cyan")
        label.append(" (", style="dim")
        label.append(risk, style=risk_color(risk))
        label.append(
            f", {len(record.get('usageNodes', []))} call sites, "
            f"{len(file_usage)} files)",
            style="dim",
        )
        package_node = root.add(label)

        symbols = record.get("exportedSymbols", [])
        if symbols:
            package_node.add(f"[dim]Symbols:[/] {', '.join(symbols)}")

        for entry in file_usage:
            lines = ", ".join(str(n) for n in entry.get("lineNumbers", []))
            file_node = package_node.add(f"[yellow]{entry.get('fileName')}[/] [dim]lines {lines}[/]")
            for example in entry.get("usageExamples", [])[:max_examples]:
                file_node.add(Text(_one_line(example), style="green"))

    return root


def build_diagnostics_tree(report: dict) -> Tree | None:
    """Build a tree listing files that failed to parse, or None if all parsed."""
    diagnostics = report.get("diagnostics", [])
    if not diagnostics:
        return None

    root = Tree(f"[bold yellow]Skipped files ({len(diagnostics)})[/]", guide_style="dim")
    for diag in diagnostics:
        line = diag.get("line")
        location = f"{diag.get('fileName')}:{line}" if line else diag.get("fileName")
        root.add(f"[yellow]{location}[/] [dim]{diag.get('message')}[/]")
    return root


def _one_line(snippet: str, limit: int = 100) -> str:
    """Collapse a snippet onto one line and truncate it."""
    text = " ".join(snippet.split())
    return text[:limit] + "..." if len(text) > limit else text


def display_tree(tree: Tree) -> None:
    """Display the tree to console."""
    console.print()
    console.print(tree)
    console.print()
