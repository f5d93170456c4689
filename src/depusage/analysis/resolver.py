"""Module specifier and identifier resolution against declared dependencies."""

from __future__ import annotations

from collections.abc import Mapping

# Conventional binding names for popular packages, e.g. `_.merge()` -> lodash.
# Only consulted when the mapped package is actually declared.
COMMON_ALIASES: dict[str, str] = {
    "_": "lodash",
    "$": "jquery",
    "React": "react",
    "Vue": "vue",
    "axios": "axios",
    "moment": "moment",
}


def resolve_package_name(specifier: str) -> str | None:
    """Map a module specifier to the package name it belongs to.

    Relative and absolute paths are local modules and resolve to None.

    >>> resolve_package_name("lodash/fp/merge")
    'lodash'
    >>> resolve_package_name("@babel/core/lib/x")
    '@babel/core'
    """
    if specifier.startswith((".", "/")):
        return None

    parts = specifier.split("/")
    if specifier.startswith("@"):
        return "/".join(parts[:2]) if len(parts) >= 2 else parts[0]

    return parts[0]


def normalize_name(name: str) -> str:
    """Lower-case a name and drop `-` and `_` so `my-pkg` and `myPkg` compare equal."""
    return name.replace("-", "").replace("_", "").lower()


def map_identifier(identifier: str, declared: Mapping[str, str]) -> str | None:
    """Guess which declared package a bare identifier refers to.

    Fuzzy fallback for call sites whose receiver has no tracked import
    binding: alias table first, then case-insensitive and normalized name
    matching against the declared packages in declaration order.
    """
    if not identifier:
        return None

    alias = COMMON_ALIASES.get(identifier)
    if alias is not None and alias in declared:
        return alias

    lowered = identifier.lower()
    normalized = normalize_name(identifier)
    for name in declared:
        if name.lower() == lowered or normalize_name(name) == normalized:
            return name

    return None
