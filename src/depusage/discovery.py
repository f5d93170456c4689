"""Source file discovery for JavaScript/TypeScript projects."""

import fnmatch
import logging
from pathlib import Path

from depusage.exclusion import FileExcluder
from depusage.models.source import SOURCE_EXTENSIONS, SourceFile

logger = logging.getLogger(__name__)


def _matches_any(rel_str: str, patterns: list[str]) -> bool:
    """Check a POSIX relative path against glob patterns."""
    for pattern in patterns:
        if fnmatch.fnmatch(rel_str, pattern):
            return True
        # Handle **/*.js matching files at root level
        if pattern.startswith("**/") and fnmatch.fnmatch(rel_str, pattern[3:]):
            return True
    return False


def find_source_files(
    path: Path,
    includes: list[str],
    excludes: list[str],
    include_ignored: bool = False,
) -> list[Path]:
    """Find source files matching include/exclude patterns, sorted by path."""
    excluder = FileExcluder(path, include_ignored=include_ignored)

    source_files: list[Path] = []

    for file in sorted(path.rglob("*")):
        if not file.is_file() or file.suffix.lower() not in SOURCE_EXTENSIONS:
            continue

        if excluder.should_exclude(file):
            continue

        rel_str = file.relative_to(path).as_posix()

        if excludes and _matches_any(rel_str, excludes):
            continue

        if _matches_any(rel_str, includes):
            source_files.append(file)

    logger.debug("Found %d source files under %s", len(source_files), path)
    return source_files


def load_sources(root: Path, files: list[Path]) -> list[SourceFile]:
    """Read files into SourceFile objects named by their path relative to root."""
    sources: list[SourceFile] = []
    for file in files:
        try:
            name = file.relative_to(root).as_posix()
        except ValueError:
            name = file.as_posix()
        content = file.read_text(encoding="utf-8", errors="replace")
        sources.append(SourceFile(name=name, content=content))
    return sources
