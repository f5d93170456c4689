"""Tests for the resolver module."""

import pytest

from depusage.analysis.resolver import (
    COMMON_ALIASES,
    map_identifier,
    normalize_name,
    resolve_package_name,
)


class TestResolvePackageName:
    """Tests for resolve_package_name."""

    def test_plain_package(self):
        """Should return the specifier itself for a bare package."""
        assert resolve_package_name("lodash") == "lodash"

    def test_plain_package_subpath(self):
        """Should keep only the first segment of a deep import."""
        assert resolve_package_name("lodash/fp/merge") == "lodash"

    def test_scoped_package(self):
        """Should keep scope and name for scoped packages."""
        assert resolve_package_name("@babel/core") == "@babel/core"

    def test_scoped_package_subpath(self):
        """Should drop the path after a scoped package name."""
        assert resolve_package_name("@babel/core/lib/x") == "@babel/core"

    def test_lone_scope(self):
        """A scope without a name is returned unchanged."""
        assert resolve_package_name("@scope") == "@scope"

    @pytest.mark.parametrize("specifier", ["./utils", "../lib/helpers", ".", "/abs/path"])
    def test_local_paths_resolve_to_none(self, specifier):
        """Relative and absolute paths are never packages."""
        assert resolve_package_name(specifier) is None

    def test_node_builtin_prefix(self):
        """Node builtins resolve like any other specifier."""
        assert resolve_package_name("node:fs") == "node:fs"


class TestNormalizeName:
    """Tests for normalize_name."""

    def test_strips_separators_and_case(self):
        assert normalize_name("My-Pkg_Name") == "mypkgname"

    def test_camel_case_matches_kebab_case(self):
        assert normalize_name("myPkg") == normalize_name("my-pkg")


class TestMapIdentifier:
    """Tests for map_identifier."""

    def test_alias_table_contents(self):
        """The alias table should cover the common conventions."""
        assert COMMON_ALIASES["_"] == "lodash"
        assert COMMON_ALIASES["$"] == "jquery"
        assert COMMON_ALIASES["React"] == "react"

    def test_alias_requires_declared_package(self):
        """An alias only maps when its package is declared."""
        assert map_identifier("_", {"lodash": "4.17.19"}) == "lodash"
        assert map_identifier("_", {"underscore": "1.13.0"}) is None

    def test_case_insensitive_match(self):
        assert map_identifier("Express", {"express": "^4.0.0"}) == "express"

    def test_normalized_match(self):
        """Identifier `myPkg` should match declared `my-pkg`."""
        assert map_identifier("myPkg", {"my-pkg": "1.0.0"}) == "my-pkg"

    def test_underscore_normalized_match(self):
        assert map_identifier("dateFns", {"date_fns": "1.0.0"}) == "date_fns"

    def test_first_declared_match_wins(self):
        declared = {"my-pkg": "1.0.0", "my_pkg": "2.0.0"}
        assert map_identifier("mypkg", declared) == "my-pkg"

    def test_no_match(self):
        assert map_identifier("console", {"lodash": "4.17.19"}) is None

    def test_empty_identifier(self):
        assert map_identifier("", {"lodash": "4.17.19"}) is None
