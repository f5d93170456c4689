"""Syntax tree visitor that collects package imports and call sites."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from depusage.analysis.parser import iter_nodes, node_line, node_text
from depusage.analysis.resolver import map_identifier, resolve_package_name
from depusage.models.source import ParsedUnit
from depusage.models.usage import FileExtraction

logger = logging.getLogger(__name__)

FUNCTION_DECLARATIONS = {"function_declaration", "generator_function_declaration"}
CLASS_DECLARATIONS = {"class_declaration", "abstract_class_declaration"}

# Branching constructs counted towards cyclomatic complexity
DECISION_NODES = {
    "if_statement",
    "for_statement",
    "for_in_statement",
    "while_statement",
    "do_statement",
    "switch_case",
    "catch_clause",
    "ternary_expression",
}
DECISION_OPERATORS = {"&&", "||", "??"}


@dataclass
class ImportSite:
    """A module specifier found in the file, with the node that carries it."""

    specifier: str
    statement: Any  # Node whose text is recorded as the import statement
    line: int  # 1-based line of the import itself
    names: list[str]  # Imported names touched (named / destructured bindings)
    bindings: list[str]  # Local names bound to the module


def string_value(node: Any) -> str | None:
    """Literal value of a string node, or of a template string without substitutions."""
    if node is None:
        return None
    if node.type == "string":
        return node_text(node)[1:-1]
    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return None
        return node_text(node)[1:-1]
    return None


def root_identifier(node: Any) -> str:
    """Walk a receiver through member accesses down to its base identifier.

    Returns an empty string when the base is not a plain identifier
    (``this``, a call result, a subscript, ...).
    """
    current = node
    while current is not None:
        if current.type == "identifier":
            return node_text(current)
        if current.type == "member_expression":
            current = current.child_by_field_name("object")
        elif current.type in ("non_null_expression", "parenthesized_expression"):
            current = current.named_children[0] if current.named_children else None
        else:
            return ""
    return ""


class UsageExtractor:
    """
    Collects usage evidence for declared packages from one parsed file.

    Works in two phases: import sites, structural counts and the local
    binding table are gathered during a single walk, then member call
    sites are resolved once every binding in the file is known (imports
    may appear below their first use).
    """

    def __init__(self, unit: ParsedUnit, declared: Mapping[str, str]) -> None:
        self.unit = unit
        self.declared = declared
        self.result = FileExtraction(file_name=unit.file_name)

        # local name -> declared package, or None for local/undeclared modules
        self.bindings: dict[str, str | None] = {}

        self._calls: list[Any] = []

    def extract(self) -> FileExtraction:
        """Walk the tree and return the file's extraction result."""
        for node in iter_nodes(self.unit.root):
            visitor = getattr(self, f"visit_{node.type}", None)
            if visitor is not None:
                visitor(node)

        for call in self._calls:
            self._record_member_call(call)

        return self.result

    # === Import Visitors ===

    def visit_import_statement(self, node: Any) -> None:
        source = node.child_by_field_name("source")
        names: list[str] = []
        bindings: list[str] = []

        for child in node.named_children:
            if child.type == "import_clause":
                self._collect_import_clause(child, names, bindings)
            elif child.type == "import_require_clause":
                # TypeScript: import x = require("m")
                source = child.child_by_field_name("source")
                for sub in child.named_children:
                    if sub.type == "identifier" and not bindings:
                        bindings.append(node_text(sub))
                    elif sub.type == "string" and source is None:
                        source = sub

        specifier = string_value(source)
        if specifier is None:
            return
        self._record_import(ImportSite(specifier, node, node_line(node), names, bindings))

    def visit_export_statement(self, node: Any) -> None:
        specifier = string_value(node.child_by_field_name("source"))
        if specifier is None:
            return

        names: list[str] = []
        for child in node.named_children:
            if child.type != "export_clause":
                continue
            for spec in child.named_children:
                if spec.type == "export_specifier":
                    name = spec.child_by_field_name("name")
                    if name is not None:
                        names.append(node_text(name))

        self._record_import(ImportSite(specifier, node, node_line(node), names, []))

    def visit_call_expression(self, node: Any) -> None:
        function = node.child_by_field_name("function")
        if function is None:
            return

        if function.type == "member_expression":
            self._calls.append(node)
            return

        is_require = function.type == "identifier" and node_text(function) == "require"
        if not (is_require or function.type == "import"):
            return

        arguments = node.child_by_field_name("arguments")
        if arguments is None or not arguments.named_children:
            return
        specifier = string_value(arguments.named_children[0])
        if specifier is None:
            return

        names: list[str] = []
        bindings: list[str] = []
        declaration = self._collect_require_bindings(node, names, bindings)
        statement = declaration if declaration is not None else node
        self._record_import(ImportSite(specifier, statement, node_line(node), names, bindings))

    # === Structural Visitors ===

    def visit_function_declaration(self, node: Any) -> None:
        self.result.functions += 1

    visit_generator_function_declaration = visit_function_declaration

    def visit_class_declaration(self, node: Any) -> None:
        self.result.classes += 1

    visit_abstract_class_declaration = visit_class_declaration

    def visit_binary_expression(self, node: Any) -> None:
        operator = node.child_by_field_name("operator")
        if operator is not None and operator.type in DECISION_OPERATORS:
            self.result.decision_points += 1

    def _visit_decision(self, node: Any) -> None:
        self.result.decision_points += 1

    visit_if_statement = _visit_decision
    visit_for_statement = _visit_decision
    visit_for_in_statement = _visit_decision
    visit_while_statement = _visit_decision
    visit_do_statement = _visit_decision
    visit_switch_case = _visit_decision
    visit_catch_clause = _visit_decision
    visit_ternary_expression = _visit_decision

    # === Helpers ===

    def _record_import(self, site: ImportSite) -> None:
        """Count an import site and attribute it when it names a declared package."""
        self.result.imports += 1

        package = resolve_package_name(site.specifier)
        if package is not None and package not in self.declared:
            package = None

        for name in site.bindings:
            self.bindings[name] = package

        if package is None:
            return

        evidence = self.result.evidence_for(package)
        evidence.import_statements.append(node_text(site.statement))
        evidence.line_numbers.append(site.line)
        for name in site.names:
            evidence.add_symbol(name)

    def _record_member_call(self, node: Any) -> None:
        """Attribute a `receiver.method(...)` call to a package, if possible."""
        callee = node.child_by_field_name("function")
        receiver = root_identifier(callee.child_by_field_name("object"))
        if not receiver:
            return

        if receiver in self.bindings:
            package = self.bindings[receiver]
        else:
            package = map_identifier(receiver, self.declared)
        if package is None:
            return

        prop = callee.child_by_field_name("property")
        method = node_text(prop) if prop is not None else "unknown"

        evidence = self.result.evidence_for(package)
        evidence.usage_snippets.append(node_text(node))
        evidence.line_numbers.append(node_line(node))
        evidence.complexity += 1
        evidence.add_symbol(method)

    def _collect_import_clause(self, clause: Any, names: list[str], bindings: list[str]) -> None:
        """Collect names from `import a, * as b, { c, d as e }`."""
        for child in clause.named_children:
            if child.type == "identifier":
                bindings.append(node_text(child))
            elif child.type == "namespace_import":
                for sub in child.named_children:
                    if sub.type == "identifier":
                        bindings.append(node_text(sub))
            elif child.type == "named_imports":
                for spec in child.named_children:
                    if spec.type != "import_specifier":
                        continue
                    name = spec.child_by_field_name("name")
                    alias = spec.child_by_field_name("alias")
                    if name is None:
                        continue
                    imported = node_text(name)
                    names.append(imported)
                    bindings.append(node_text(alias) if alias is not None else imported)

    def _collect_require_bindings(self, call: Any, names: list[str], bindings: list[str]) -> Any | None:
        """Collect bindings when a require()/import() call initializes a variable.

        Returns the enclosing variable declaration, or None when the call is
        not the initializer of one.

        Handles `const x = require("m")`, `const x = await import("m")`,
        `const x = require("m").prop` and destructuring patterns.
        """
        value = call
        parent = call.parent
        member: str | None = None

        if parent is not None and parent.type == "await_expression":
            value = parent
            parent = parent.parent
        if parent is not None and parent.type == "member_expression":
            prop = parent.child_by_field_name("property")
            if parent.child_by_field_name("object") == value and prop is not None:
                member = node_text(prop)
                value = parent
                parent = parent.parent

        if parent is None or parent.type != "variable_declarator":
            return None
        if parent.child_by_field_name("value") != value:
            return None

        declaration = parent.parent
        target = parent.child_by_field_name("name")
        if target is None:
            return declaration

        if member is not None:
            names.append(member)

        if target.type == "identifier":
            bindings.append(node_text(target))
        elif target.type == "object_pattern" and member is None:
            self._collect_object_pattern(target, names, bindings)
        return declaration

    def _collect_object_pattern(self, pattern: Any, names: list[str], bindings: list[str]) -> None:
        """Collect `{ a, b: c, d = 1 }` destructuring as touched names and bindings."""
        for child in pattern.named_children:
            if child.type == "shorthand_property_identifier_pattern":
                names.append(node_text(child))
                bindings.append(node_text(child))
            elif child.type == "object_assignment_pattern":
                left = child.child_by_field_name("left")
                if left is not None:
                    names.append(node_text(left))
                    bindings.append(node_text(left))
            elif child.type == "pair_pattern":
                key = child.child_by_field_name("key")
                value = child.child_by_field_name("value")
                if key is not None:
                    names.append(node_text(key))
                if value is not None and value.type == "assignment_pattern":
                    value = value.child_by_field_name("left")
                if value is not None and value.type == "identifier":
                    bindings.append(node_text(value))


def extract_usage(unit: ParsedUnit, declared: Mapping[str, str]) -> FileExtraction:
    """Extract per-package usage evidence and structural counts from one file."""
    result = UsageExtractor(unit, declared).extract()
    logger.debug(
        "%s: %d import sites, %d packages with evidence",
        unit.file_name,
        result.imports,
        len(result.evidence),
    )
    return result
