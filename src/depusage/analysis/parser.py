"""Tree-sitter parsing for JavaScript and TypeScript sources.

Each grammar variant exposes the same ``parse_source(file) -> ParsedUnit``
contract; the variant is picked from the file extension through the
``GRAMMARS`` table:

- ``.ts`` / ``.mts`` / ``.cts``: TypeScript grammar
- ``.tsx``: TSX grammar
- everything else: JavaScript grammar (JSX, decorators, class fields,
  optional chaining, ``??``, dynamic ``import()``, top-level ``await`` and
  ``return`` are all part of it)

``.js`` and ``.jsx`` files never go through a TypeScript grammar, so type
annotations, ``interface`` declarations or ``as`` casts in them are parse
failures. Such files need a ``.ts`` or ``.tsx`` extension to be analyzed.

Tree-sitter recovers from syntax errors instead of failing, so a tree that
contains ``ERROR`` or ``MISSING`` nodes is reported as a ``ParseError``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from functools import lru_cache
from typing import Any

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Parser

from depusage.errors import ParseError
from depusage.models.source import Grammar, ParsedUnit, SourceFile

logger = logging.getLogger(__name__)

# Grammar -> function returning the tree-sitter language capsule
GRAMMARS: dict[Grammar, Callable[[], Any]] = {
    Grammar.JAVASCRIPT: tree_sitter_javascript.language,
    Grammar.TYPESCRIPT: tree_sitter_typescript.language_typescript,
    Grammar.TSX: tree_sitter_typescript.language_tsx,
}


@lru_cache(maxsize=None)
def get_language(grammar: Grammar) -> Language:
    """Load (once) the tree-sitter Language for a grammar."""
    logger.debug("Loading tree-sitter grammar for %s", grammar.value)
    return Language(GRAMMARS[grammar]())


def iter_nodes(root: Any, skip: Callable[[Any], bool] | None = None) -> Iterator[Any]:
    """Yield *root* and its descendants in source order.

    Uses an explicit stack, so arbitrarily deep trees never hit the
    interpreter recursion limit. Children of nodes for which *skip*
    returns True are not visited.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if skip is not None and skip(node):
            continue
        stack.extend(reversed(node.children))


def node_text(node: Any) -> str:
    """Decode the source text spanned by a node."""
    return node.text.decode("utf-8", errors="replace")


def node_line(node: Any) -> int:
    """1-based line on which a node starts."""
    return node.start_point[0] + 1


def find_syntax_error(root: Any) -> Any | None:
    """Return the first ERROR or MISSING node in the tree, if any."""
    if not root.has_error:
        return None
    for node in iter_nodes(root, skip=lambda n: not n.has_error):
        if node.type == "ERROR" or node.is_missing:
            return node
    return root


def parse_source(file: SourceFile) -> ParsedUnit:
    """Parse one source file with the grammar selected by its extension.

    Raises:
        ParseError: the text cannot be encoded or contains syntax errors.
    """
    grammar = file.grammar

    try:
        source = file.content.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ParseError(file.name, f"Cannot encode source as UTF-8: {exc.reason}") from exc

    parser = Parser(get_language(grammar))
    tree = parser.parse(source)

    error_node = find_syntax_error(tree.root_node)
    if error_node is not None:
        if error_node.is_missing:
            message = f"Missing '{error_node.type}'"
        else:
            message = f"Unexpected syntax near {_preview(error_node)!r}"
        raise ParseError(file.name, f"{message} ({grammar.value} grammar)", node_line(error_node))

    return ParsedUnit(file_name=file.name, grammar=grammar, tree=tree)


def _preview(node: Any, limit: int = 40) -> str:
    """Short single-line preview of a node's text."""
    text = " ".join(node_text(node).split())
    return text[:limit] + "..." if len(text) > limit else text
