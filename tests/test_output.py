"""Tests for the output module."""

import json
from datetime import datetime
from pathlib import Path

from rich.console import Console

from depusage.analysis.engine import analyze_sources
from depusage.models.quick_scan import QuickScanReport
from depusage.models.results import AnalysisMetadata, AnalysisResults
from depusage.models.source import SourceFile
from depusage.output.json_writer import dump_report, load_results, write_results
from depusage.output.tree import (
    build_diagnostics_tree,
    build_usage_tree,
    meets_min_risk,
    risk_color,
)

FILES = [
    SourceFile("a.js", "const _ = require('lodash');\n_.merge(a, b);\n_.get(a, 'x');\n"),
    SourceFile("b.js", "import axios from 'axios';\n"),
    SourceFile("broken.js", "function ( {\n"),
]
DEPS = {"lodash": "4.17.19", "axios": "^1.0.0", "jest": "^29.0.0"}


def make_results() -> AnalysisResults:
    report = analyze_sources(FILES, DEPS)
    return AnalysisResults(
        metadata=AnalysisMetadata(
            project="app",
            analyzed_at=datetime(2024, 1, 2, 3, 4, 5),
            depusage_version="0.1.0",
            files_analyzed=report.files_analyzed,
            files_failed=len(report.diagnostics),
            dependencies=len(DEPS),
            analysis_duration_ms=12,
        ),
        report=report,
        quick_scan=QuickScanReport(total_files=3),
    )


def render(tree) -> str:
    console = Console(record=True, width=120)
    console.print(tree)
    return console.export_text()


class TestWriteResults:
    """Tests for write_results and load_results."""

    def test_writes_valid_json(self, tmp_path: Path):
        output = tmp_path / "results.json"

        write_results(make_results(), output)

        with open(output) as f:
            data = json.load(f)
        assert list(data) == ["version", "metadata", "report", "quickScan"]

    def test_metadata_fields(self, tmp_path: Path):
        output = tmp_path / "results.json"
        write_results(make_results(), output)

        metadata = load_results(output)["metadata"]
        assert metadata["project"] == "app"
        assert metadata["analyzedAt"] == "2024-01-02T03:04:05"
        assert metadata["filesAnalyzed"] == 2
        assert metadata["filesFailed"] == 1
        assert metadata["dependencies"] == 3

    def test_report_round_trip(self, tmp_path: Path):
        results = make_results()
        output = tmp_path / "results.json"
        write_results(results, output)

        assert load_results(output)["report"] == results.report.to_dict()

    def test_optional_sections_omitted(self):
        assert AnalysisResults().to_dict() == {"version": "1.0"}

    def test_dump_report_keeps_unicode(self):
        assert dump_report({"name": "café"}) == '{\n  "name": "café"\n}'


class TestRiskHelpers:
    """Tests for risk level helpers."""

    def test_risk_color(self):
        assert risk_color("high") == "red"
        assert risk_color("medium") == "yellow"
        assert risk_color("low") == "green"
        assert risk_color("other") == "white"

    def test_meets_min_risk(self):
        assert meets_min_risk("high", "medium")
        assert meets_min_risk("medium", "medium")
        assert not meets_min_risk("low", "medium")
        assert meets_min_risk("low", "low")


class TestUsageTree:
    """Tests for build_usage_tree."""

    def test_lists_used_packages_only(self):
        text = render(build_usage_tree(make_results().to_dict()["report"]))

        assert "lodash" in text
        assert "axios" in text
        assert "jest" not in text

    def test_shows_symbols_and_examples(self):
        text = render(build_usage_tree(make_results().to_dict()["report"]))

        assert "Symbols: merge, get" in text
        assert "_.merge(a, b)" in text
        assert "a.js" in text

    def test_min_risk_filter(self):
        tree = build_usage_tree(make_results().to_dict()["report"], min_risk="medium")
        text = render(tree)

        # lodash is medium risk, axios (import only) is low
        assert "lodash" in text
        assert "axios" not in text

    def test_max_examples(self):
        tree = build_usage_tree(make_results().to_dict()["report"], max_examples=1)
        text = render(tree)

        assert "_.merge(a, b)" in text
        assert "_.get(a, 'x')" not in text


class TestDiagnosticsTree:
    """Tests for build_diagnostics_tree."""

    def test_lists_skipped_files(self):
        tree = build_diagnostics_tree(make_results().to_dict()["report"])

        assert tree is not None
        text = render(tree)
        assert "Skipped files (1)" in text
        assert "broken.js:" in text

    def test_none_when_everything_parsed(self):
        assert build_diagnostics_tree({"diagnostics": []}) is None
