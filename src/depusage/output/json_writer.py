"""JSON output writers for config and results."""

import json
from pathlib import Path

from depusage.models.results import AnalysisResults


def write_results(results: AnalysisResults, output_path: Path) -> None:
    """Write the results.json file."""
    data = results.to_dict()

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_results(results_path: Path) -> dict:
    """Load a results.json file."""
    with open(results_path, "r", encoding="utf-8") as f:
        return json.load(f)


def dump_report(data: dict) -> str:
    """Serialize a report dict deterministically."""
    return json.dumps(data, indent=2, ensure_ascii=False)
