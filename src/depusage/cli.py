"""depusage CLI - dependency usage and migration risk analysis for JS/TS projects."""

import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from depusage import __version__
from depusage.analysis.engine import analyze_sources
from depusage.analysis.quick_scan import migration_complexity, quick_scan
from depusage.analysis.scoring import RiskConfig
from depusage.config import (
    default_config,
    get_analysis_excludes,
    get_analysis_includes,
    get_risk_config,
    get_usage_example_cap,
    get_workers,
    load_config,
    save_config,
)
from depusage.discovery import find_source_files, load_sources
from depusage.errors import ConfigError, ManifestError
from depusage.manifest import load_dependencies
from depusage.models.quick_scan import QuickScanReport
from depusage.models.results import AnalysisMetadata, AnalysisResults
from depusage.output.json_writer import load_results, write_results
from depusage.output.tree import (
    RISK_LEVELS,
    build_diagnostics_tree,
    build_usage_tree,
    display_tree,
    meets_min_risk,
    risk_color,
)
from depusage.paths import (
    ensure_depusage_dir,
    get_config_path,
    get_manifest_path,
    get_results_path,
)

app = typer.Typer(
    name="depusage",
    help="Analyze how a JavaScript/TypeScript project uses its declared dependencies",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()
logger = logging.getLogger(__name__)

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def version_callback(value: bool) -> None:
    if value:
        console.print(f"depusage version {__version__}")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Route log records through Rich on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Logging level (debug, info, warning, error, critical)",
    ),
) -> None:
    """Analyze how a JavaScript/TypeScript project uses its declared dependencies."""
    if log_level.lower() not in LOG_LEVELS:
        console.print(f"[red]Unknown log level:[/] {log_level}")
        raise typer.Exit(1)
    configure_logging(log_level)


@app.command()
def init(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the JavaScript/TypeScript project",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing config file",
    ),
) -> None:
    """Write a default configuration to .depusage/config.json."""
    path = path.resolve()
    config_path = get_config_path(path)

    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists:[/] {config_path}")
        console.print("Use [bold]--force[/] to overwrite it.")
        raise typer.Exit(1)

    ensure_depusage_dir(path)
    save_config(default_config(), config_path)
    console.print(f"[green]Configuration saved to:[/] {config_path}")


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the JavaScript/TypeScript project to analyze",
    ),
    manifest: Optional[Path] = typer.Option(
        None,
        "--manifest",
        "-m",
        help="Path to package.json (default: PATH/package.json)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: .depusage/config.json if present)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Path for results JSON output (default: .depusage/results.json)",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Threads used for parsing (overrides config)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show full usage tree in CLI (default: summary only)",
    ),
    quick: bool = typer.Option(
        True,
        "--quick/--no-quick",
        help="Also run the regex-based quick scan",
    ),
    include_ignored: bool = typer.Option(
        False,
        "--include-ignored",
        help="Include files normally excluded by .gitignore and default patterns",
    ),
) -> None:
    """Run the syntax tree usage analysis and write results JSON."""
    path = path.resolve()
    manifest = manifest or get_manifest_path(path)

    if output is None:
        ensure_depusage_dir(path)
        output = get_results_path(path)

    try:
        config_data = _load_config_or_default(path, config)
        dependencies = load_dependencies(manifest)
        risk_config = get_risk_config(config_data)
        example_cap = get_usage_example_cap(config_data)
        workers = workers or get_workers(config_data)
    except (ConfigError, ManifestError) as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    console.print(Panel.fit("[bold blue]depusage - Dependency Usage Analysis[/]"))
    console.print(f"\n[dim]Scanning:[/] {path}")
    console.print(f"[dim]Manifest:[/] {manifest} ({len(dependencies)} dependencies)\n")

    start_time = time.time()

    files = find_source_files(
        path,
        get_analysis_includes(config_data),
        get_analysis_excludes(config_data),
        include_ignored,
    )
    sources = load_sources(path, files)
    console.print(f"[dim]Found {len(sources)} source files to analyze[/]\n")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        parse_task = progress.add_task("Parsing source files...", total=len(sources))

        try:
            report = analyze_sources(
                sources,
                dependencies,
                risk_config=risk_config,
                workers=workers,
                example_cap=example_cap,
                on_file=lambda _: progress.update(parse_task, advance=1),
            )
        except Exception as e:
            logger.exception("Analysis aborted")
            console.print(f"[red]Analysis failed:[/] {e}")
            raise typer.Exit(1)

        quick_report = None
        if quick:
            progress.add_task("Running quick scan...", total=None)
            quick_report = quick_scan(sources, dependencies)

    duration_ms = int((time.time() - start_time) * 1000)

    results = AnalysisResults(
        metadata=AnalysisMetadata(
            project=path.name,
            analyzed_at=datetime.now(),
            depusage_version=__version__,
            files_analyzed=report.files_analyzed,
            files_failed=len(report.diagnostics),
            dependencies=len(dependencies),
            analysis_duration_ms=duration_ms,
        ),
        report=report,
        quick_scan=quick_report,
    )

    write_results(results, output)
    console.print(f"\n[green]Results saved to:[/] {output}")

    data = results.to_dict()
    _display_summary(data)

    diagnostics_tree = build_diagnostics_tree(data["report"])
    if diagnostics_tree is not None:
        display_tree(diagnostics_tree)

    if verbose:
        display_tree(build_usage_tree(data["report"]))


@app.command()
def scan(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the JavaScript/TypeScript project to scan",
    ),
    manifest: Optional[Path] = typer.Option(
        None,
        "--manifest",
        "-m",
        help="Path to package.json (default: PATH/package.json)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: .depusage/config.json if present)",
    ),
    include_ignored: bool = typer.Option(
        False,
        "--include-ignored",
        help="Include files normally excluded by .gitignore and default patterns",
    ),
) -> None:
    """Run only the regex-based quick scan and print the results."""
    path = path.resolve()
    manifest = manifest or get_manifest_path(path)

    try:
        config_data = _load_config_or_default(path, config)
        dependencies = load_dependencies(manifest)
        risk_config = get_risk_config(config_data)
    except (ConfigError, ManifestError) as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    files = find_source_files(
        path,
        get_analysis_includes(config_data),
        get_analysis_excludes(config_data),
        include_ignored,
    )
    report = quick_scan(load_sources(path, files), dependencies)
    _display_quick_scan(report, risk_config)


@app.command()
def show(
    results_path: Optional[Path] = typer.Argument(
        None,
        help="Path to results file (default: .depusage/results.json)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show full usage tree",
    ),
    min_risk: str = typer.Option(
        "low",
        "--min-risk",
        help="Only show packages at this risk level or higher (low, medium, high)",
    ),
) -> None:
    """Display results from a previous analysis run."""
    if results_path is None:
        results_path = get_results_path(Path.cwd())

    if not results_path.exists():
        console.print(f"[red]Results file not found:[/] {results_path}")
        raise typer.Exit(1)

    if min_risk not in RISK_LEVELS:
        console.print(f"[red]Unknown risk level:[/] {min_risk}")
        raise typer.Exit(1)

    data = load_results(results_path)

    _display_summary(data, min_risk)
    if verbose and "report" in data:
        display_tree(build_usage_tree(data["report"], min_risk=min_risk))


def _load_config_or_default(path: Path, config: Optional[Path]) -> dict:
    """Load an explicit config, the project's .depusage config, or defaults."""
    if config is not None:
        if not config.exists():
            raise ConfigError(f"Config file not found: {config}")
        return load_config(config)

    project_config = get_config_path(path)
    if project_config.exists():
        return load_config(project_config)
    return default_config()


def _display_summary(data: dict, min_risk: str = "low") -> None:
    """Display per-package usage and code metrics."""
    report = data.get("report", {})
    package_usage: dict = report.get("packageUsage", {})
    metrics: dict = report.get("codeMetrics", {})

    table = Table(title="Package usage", header_style="bold")
    table.add_column("Package", style="cyan")
    table.add_column("Risk")
    table.add_column("Imports", justify="right")
    table.add_column("Calls", justify="right")
    table.add_column("Symbols", justify="right")
    table.add_column("Files", justify="right")

    unused: list[str] = []
    for name, record in package_usage.items():
        if not record.get("importNodes") and not record.get("usageNodes"):
            unused.append(name)
            continue
        risk = record.get("migrationRisk", "low")
        if not meets_min_risk(risk, min_risk):
            continue
        table.add_row(
            name,
            f"[{risk_color(risk)}]{risk}[/]",
            str(len(record.get("importNodes", []))),
            str(len(record.get("usageNodes", []))),
            str(len(record.get("exportedSymbols", []))),
            str(len(record.get("fileUsage", []))),
        )

    console.print()
    console.print(table)

    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column("Key", style="cyan")
    summary.add_column("Value")

    metadata = data.get("metadata", {})
    if metadata:
        summary.add_row("Files analyzed", str(metadata.get("filesAnalyzed", 0)))
        summary.add_row("Files skipped", str(metadata.get("filesFailed", 0)))
    summary.add_row("Functions", str(metrics.get("totalFunctions", 0)))
    summary.add_row("Classes", str(metrics.get("totalClasses", 0)))
    summary.add_row("Imports", str(metrics.get("totalImports", 0)))
    summary.add_row("Cyclomatic complexity", str(metrics.get("cyclomaticComplexity", 0)))
    summary.add_row("Unused dependencies", ", ".join(unused) if unused else "-")

    console.print(Panel(summary, title="[bold]Code Metrics[/]", border_style="blue"))


def _display_quick_scan(report: QuickScanReport, risk_config: RiskConfig) -> None:
    """Display quick scan results."""
    table = Table(title="Quick scan", header_style="bold")
    table.add_column("Package", style="cyan")
    table.add_column("Complexity")
    table.add_column("Files", justify="right")
    table.add_column("Methods")

    for name, usage in report.package_usage.items():
        if not usage.files_using:
            continue
        risk = migration_complexity(name, usage, risk_config).value
        table.add_row(
            name,
            f"[{risk_color(risk)}]{risk}[/]",
            str(len(usage.files_using)),
            ", ".join(usage.methods_used[:8]),
        )

    console.print(table)
    console.print(f"[dim]Scanned {report.total_files} files[/]")
    if report.unused_dependencies:
        console.print(
            f"[yellow]Unused dependencies:[/] {', '.join(report.unused_dependencies)}"
        )


if __name__ == "__main__":
    app()
