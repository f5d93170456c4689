"""Data models for source files and parsed syntax trees."""

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Any


class Grammar(Enum):
    """Tree-sitter grammar variants used to parse a source file."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"


# Extension -> grammar. Anything not listed falls back to JAVASCRIPT.
EXTENSION_GRAMMARS: dict[str, Grammar] = {
    ".ts": Grammar.TYPESCRIPT,
    ".mts": Grammar.TYPESCRIPT,
    ".cts": Grammar.TYPESCRIPT,
    ".tsx": Grammar.TSX,
}

SOURCE_EXTENSIONS = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts")


@dataclass(frozen=True)
class SourceFile:
    """A source file supplied by the caller for one analysis run."""

    name: str  # Unique within a batch, usually a project-relative path
    content: str

    @property
    def extension(self) -> str:
        return PurePosixPath(self.name).suffix.lower()

    @property
    def grammar(self) -> Grammar:
        return EXTENSION_GRAMMARS.get(self.extension, Grammar.JAVASCRIPT)


@dataclass
class ParsedUnit:
    """Syntax tree for one source file, tagged with the grammar that produced it."""

    file_name: str
    grammar: Grammar
    tree: Any  # tree_sitter.Tree

    @property
    def root(self) -> Any:
        return self.tree.root_node
