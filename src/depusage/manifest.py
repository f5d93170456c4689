"""package.json manifest loading."""

import json
import logging
from pathlib import Path

from depusage.errors import ManifestError

logger = logging.getLogger(__name__)

DEPENDENCY_SECTIONS = ("dependencies", "devDependencies")


def parse_manifest(content: str) -> dict[str, str]:
    """Merge runtime and development dependencies from package.json text.

    Later sections win on name collisions, so a package listed in both
    keeps its devDependencies range.
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid package.json: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError("package.json must contain a JSON object")

    dependencies: dict[str, str] = {}
    for section in DEPENDENCY_SECTIONS:
        entries = data.get(section) or {}
        if not isinstance(entries, dict):
            raise ManifestError(f"'{section}' in package.json must be an object")
        for name, version in entries.items():
            dependencies[name] = str(version)

    return dependencies


def load_dependencies(manifest_path: Path) -> dict[str, str]:
    """Load the merged dependency set from a package.json file."""
    if not manifest_path.exists():
        raise ManifestError(f"Manifest not found: {manifest_path}")

    dependencies = parse_manifest(manifest_path.read_text(encoding="utf-8"))
    logger.debug("Loaded %d dependencies from %s", len(dependencies), manifest_path)
    return dependencies
