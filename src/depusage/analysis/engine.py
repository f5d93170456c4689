"""Analysis run driver: parse, extract, aggregate and score a batch of files."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor

from depusage.analysis.aggregator import DEFAULT_USAGE_EXAMPLE_CAP, UsageAggregator
from depusage.analysis.extractor import extract_usage
from depusage.analysis.parser import parse_source
from depusage.analysis.scoring import RiskConfig, RiskScorer
from depusage.errors import ParseError
from depusage.models.source import SourceFile
from depusage.models.usage import AnalysisReport, FileExtraction, ParseDiagnostic

logger = logging.getLogger(__name__)

FileOutcome = FileExtraction | ParseDiagnostic


def process_file(file: SourceFile, declared: Mapping[str, str]) -> FileOutcome:
    """Parse and extract one file; a parse failure becomes a diagnostic."""
    try:
        unit = parse_source(file)
    except ParseError as exc:
        logger.warning("Skipping %s: %s", file.name, exc.message)
        return ParseDiagnostic(
            file_name=file.name,
            grammar=file.grammar.value,
            message=exc.message,
            line=exc.line,
        )
    return extract_usage(unit, declared)


def analyze_sources(
    files: Sequence[SourceFile],
    dependencies: Mapping[str, str],
    *,
    risk_config: RiskConfig | None = None,
    workers: int = 1,
    example_cap: int = DEFAULT_USAGE_EXAMPLE_CAP,
    on_file: Callable[[FileOutcome], None] | None = None,
) -> AnalysisReport:
    """
    Analyze how a batch of source files uses the declared dependencies.

    Args:
        files: Source files in a caller-defined order; merge order follows it
        dependencies: Declared package name -> version range
        risk_config: Weights and thresholds for migration risk
        workers: Number of threads used for parsing and extraction
        example_cap: Maximum usage examples kept per file in each record
        on_file: Optional callback invoked with each file outcome, in order

    Returns:
        A report with exactly one package record per declared dependency.
        Files that fail to parse are listed in ``diagnostics`` and contribute
        nothing else. Any other error propagates and no report is produced.
    """
    declared = dict(dependencies)
    logger.info("Analyzing %d files against %d dependencies", len(files), len(declared))

    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # map() yields in submission order regardless of completion order
            outcomes = list(pool.map(lambda f: process_file(f, declared), files))
    else:
        outcomes = [process_file(f, declared) for f in files]

    aggregator = UsageAggregator(declared, example_cap=example_cap)
    diagnostics: list[ParseDiagnostic] = []

    for outcome in outcomes:
        if on_file is not None:
            on_file(outcome)
        if isinstance(outcome, ParseDiagnostic):
            diagnostics.append(outcome)
        else:
            aggregator.add_file(outcome)

    scorer = RiskScorer(risk_config)
    for record in aggregator.records.values():
        record.migration_risk = scorer.score(record)

    if diagnostics:
        logger.warning("%d of %d files could not be parsed", len(diagnostics), len(files))

    return AnalysisReport(
        package_usage=aggregator.records,
        code_metrics=aggregator.metrics,
        dependency_graph=aggregator.graph,
        diagnostics=diagnostics,
        files_analyzed=aggregator.files_added,
    )
