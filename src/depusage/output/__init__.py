"""Output modules for CLI display and file writing."""

from depusage.output.json_writer import load_results, write_results
from depusage.output.tree import build_diagnostics_tree, build_usage_tree, display_tree

__all__ = [
    "build_diagnostics_tree",
    "build_usage_tree",
    "display_tree",
    "load_results",
    "write_results",
]
