"""Tests for the exclusion module."""

from pathlib import Path

from depusage.exclusion import DEFAULT_EXCLUDES, FileExcluder


class TestDefaultExcludes:
    """Tests for default exclusion patterns."""

    def test_default_excludes_list(self) -> None:
        """Verify DEFAULT_EXCLUDES contains expected patterns."""
        assert "node_modules" in DEFAULT_EXCLUDES
        assert "dist" in DEFAULT_EXCLUDES
        assert "coverage" in DEFAULT_EXCLUDES
        assert ".git" in DEFAULT_EXCLUDES
        assert ".depusage" in DEFAULT_EXCLUDES

    def test_excludes_node_modules(self, tmp_path: Path) -> None:
        """Should exclude installed packages at any depth."""
        excluder = FileExcluder(tmp_path)

        assert excluder.should_exclude(tmp_path / "node_modules" / "lodash" / "index.js")
        assert excluder.should_exclude(
            tmp_path / "packages" / "web" / "node_modules" / "react" / "index.js"
        )

    def test_excludes_build_output(self, tmp_path: Path) -> None:
        """Should exclude bundler and framework output directories."""
        excluder = FileExcluder(tmp_path)

        assert excluder.should_exclude(tmp_path / "dist" / "bundle.js")
        assert excluder.should_exclude(tmp_path / "build" / "static" / "main.js")
        assert excluder.should_exclude(tmp_path / ".next" / "server" / "page.js")

    def test_does_not_exclude_source_files(self, tmp_path: Path) -> None:
        """Should not exclude normal source files."""
        excluder = FileExcluder(tmp_path)

        assert not excluder.should_exclude(tmp_path / "src" / "app.ts")
        assert not excluder.should_exclude(tmp_path / "index.js")

    def test_directory_name_prefix_not_excluded(self, tmp_path: Path) -> None:
        """`distribution/` is not `dist/`."""
        excluder = FileExcluder(tmp_path)

        assert not excluder.should_exclude(tmp_path / "distribution" / "app.js")


class TestIgnoreFiles:
    """Tests for .gitignore and .eslintignore parsing."""

    def test_loads_gitignore_patterns(self, tmp_path: Path) -> None:
        """Should load patterns from .gitignore."""
        (tmp_path / ".gitignore").write_text("*.generated.js\nstorybook-static/\n# comment\n\n")

        excluder = FileExcluder(tmp_path)

        assert excluder.should_exclude(tmp_path / "src" / "api.generated.js")
        assert excluder.should_exclude(tmp_path / "storybook-static" / "main.js")

    def test_gitignore_comments_ignored(self, tmp_path: Path) -> None:
        """Commented patterns must not apply."""
        (tmp_path / ".gitignore").write_text("# *.js\nactual_pattern/\n")

        excluder = FileExcluder(tmp_path)

        assert not excluder.should_exclude(tmp_path / "app.js")
        assert excluder.should_exclude(tmp_path / "actual_pattern" / "file.js")

    def test_loads_eslintignore_patterns(self, tmp_path: Path) -> None:
        """Should load patterns from .eslintignore."""
        (tmp_path / ".eslintignore").write_text("vendor/\n")

        excluder = FileExcluder(tmp_path)

        assert excluder.should_exclude(tmp_path / "vendor" / "jquery.js")
        assert str(tmp_path / ".eslintignore") in excluder.sources

    def test_negated_pattern(self, tmp_path: Path) -> None:
        """A later `!pattern` re-includes a file."""
        (tmp_path / ".gitignore").write_text("*.js\n!keep.js\n")

        excluder = FileExcluder(tmp_path)

        assert excluder.should_exclude(tmp_path / "drop.js")
        assert not excluder.should_exclude(tmp_path / "keep.js")

    def test_missing_ignore_files_ok(self, tmp_path: Path) -> None:
        """Should work without any ignore file."""
        excluder = FileExcluder(tmp_path)

        assert excluder.sources == ["defaults"]
        assert excluder.should_exclude(tmp_path / "node_modules" / "x.js")
        assert not excluder.should_exclude(tmp_path / "app.js")


class TestIncludeIgnoredFlag:
    """Tests for the include_ignored flag."""

    def test_include_ignored_bypasses_all_exclusions(self, tmp_path: Path) -> None:
        """When include_ignored=True, nothing should be excluded."""
        (tmp_path / ".gitignore").write_text("*.generated.js\n")

        excluder = FileExcluder(tmp_path, include_ignored=True)

        assert not excluder.should_exclude(tmp_path / "api.generated.js")
        assert not excluder.should_exclude(tmp_path / "node_modules" / "lodash" / "index.js")

    def test_include_ignored_filter_files_returns_all(self, tmp_path: Path) -> None:
        excluder = FileExcluder(tmp_path, include_ignored=True)
        files = [tmp_path / "src" / "app.js", tmp_path / "dist" / "bundle.js"]

        assert excluder.filter_files(files) == files


class TestExtraExcludes:
    """Tests for extra_excludes parameter."""

    def test_extra_excludes_merge_with_defaults(self, tmp_path: Path) -> None:
        excluder = FileExcluder(tmp_path, extra_excludes=["fixtures"])

        assert excluder.should_exclude(tmp_path / "node_modules" / "a.js")
        assert excluder.should_exclude(tmp_path / "fixtures" / "sample.js")
        assert "fixtures" in excluder.patterns


class TestFilterFiles:
    """Tests for the filter_files method."""

    def test_filter_files_removes_excluded(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("generated/\n")
        excluder = FileExcluder(tmp_path)

        files = [
            tmp_path / "src" / "app.js",
            tmp_path / "generated" / "client.ts",
            tmp_path / "coverage" / "lcov-report" / "prettify.js",
        ]

        assert excluder.filter_files(files) == [tmp_path / "src" / "app.js"]

    def test_filter_files_empty_list(self, tmp_path: Path) -> None:
        assert FileExcluder(tmp_path).filter_files([]) == []


class TestEdgeCases:
    """Tests for edge cases."""

    def test_file_outside_project_root(self, tmp_path: Path) -> None:
        """Files outside project root are never excluded."""
        excluder = FileExcluder(tmp_path)

        assert not excluder.should_exclude(tmp_path.parent / "outside.js")

    def test_invalid_gitignore_encoding(self, tmp_path: Path) -> None:
        """An unreadable .gitignore is skipped."""
        (tmp_path / ".gitignore").write_bytes(b"\xff\xfe*.js\n")

        excluder = FileExcluder(tmp_path)

        assert not excluder.should_exclude(tmp_path / "app.js")
        assert str(tmp_path / ".gitignore") not in excluder.sources
