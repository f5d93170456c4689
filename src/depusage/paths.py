"""Centralized path management for depusage output files."""

from pathlib import Path

# Directory name for depusage outputs
DEPUSAGE_DIR = ".depusage"

# File names within the .depusage directory
CONFIG_FILE = "config.json"
RESULTS_FILE = "results.json"

MANIFEST_FILE = "package.json"


def get_depusage_dir(project_path: Path) -> Path:
    """Get the .depusage directory path for a project."""
    return project_path / DEPUSAGE_DIR


def ensure_depusage_dir(project_path: Path) -> Path:
    """Ensure .depusage directory exists and return its path."""
    depusage_dir = get_depusage_dir(project_path)
    depusage_dir.mkdir(parents=True, exist_ok=True)
    return depusage_dir


def get_config_path(project_path: Path) -> Path:
    """Get the config.json path for a project."""
    return get_depusage_dir(project_path) / CONFIG_FILE


def get_results_path(project_path: Path) -> Path:
    """Get the results.json path for a project."""
    return get_depusage_dir(project_path) / RESULTS_FILE


def get_manifest_path(project_path: Path) -> Path:
    """Get the package.json path for a project."""
    return project_path / MANIFEST_FILE
