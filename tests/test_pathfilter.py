"""
Tests for the Path Filter
"""

import pytest

from lockguard.core.locator import DEFAULT_EXCLUDES
from lockguard.core.pathfilter import is_included, matches_glob


class TestMatchesGlob:
    """Tests for matches_glob."""

    @pytest.mark.parametrize("path,pattern,expected", [
        ("src/main.go", "src/**", True),
        ("src/nested/file.go", "src/**", True),
        ("src", "src/**", True),
        ("dist/main.go", "src/**", False),
        ("srcfoo/main.go", "src/**", False),
        ("node_modules/package.json", "**/node_modules/**", True),
        ("src/node_modules/package.json", "**/node_modules/**", True),
        ("src/main.go", "**/node_modules/**", False),
        ("my_node_modules/yarn.lock", "**/node_modules/**", False),
        ("packages/a/yarn.lock", "**/yarn.lock", True),
        ("yarn.lock", "**/yarn.lock", True),
        ("packages/a/package-lock.json", "**/yarn.lock", False),
        ("packages/a/yarn.lock", "packages/*/yarn.lock", True),
        ("packages/a/b/yarn.lock", "packages/*/yarn.lock", False),
        ("packages/a/b/yarn.lock", "packages/**/yarn.lock", True),
        ("yarn.lock", "yarn.lock", True),
        ("a/yarn.lock", "yarn.lock", False),
    ])
    def test_patterns(self, path, pattern, expected):
        assert matches_glob(path, pattern) is expected

    def test_regex_metacharacters_are_literal(self):
        """Test '.' and other regex characters match literally."""
        assert matches_glob("a/yarn.lock", "a/yarn.lock")
        assert not matches_glob("a/yarnXlock", "a/yarn.lock")


class TestIsIncluded:
    """Tests for is_included."""

    @pytest.mark.parametrize("path,root,include,exclude,expected", [
        ("/app/src/main.go", "/app", [], [], True),
        ("/app/node_modules/package.json", "/app", [], ["**/node_modules/**"], False),
        ("/app/src/app.js", "/app", ["src/**"], [], True),
        ("/app/dist/app.js", "/app", ["src/**"], [], False),
        ("/app/src/main.go", "/app", ["src/**"], ["**/node_modules/**"], True),
    ])
    def test_include_exclude(self, path, root, include, exclude, expected):
        assert is_included(path, root, include, exclude) is expected

    def test_exclude_dominates_include(self):
        """Test a path matching both include and exclude is excluded."""
        path = "/app/src/node_modules/x/yarn.lock"
        assert not is_included(path, "/app", ["src/**"], ["**/node_modules/**"])
        assert not is_included("/app/src/yarn.lock", "/app", ["src/**"], ["src/**"])

    def test_default_excludes(self):
        """Test the default exclude list."""
        for rel in ("node_modules/a/yarn.lock", "web/dist/yarn.lock", "x/.turbo/yarn.lock",
                    "build/package-lock.json", "tmp/pnpm-lock.yaml", ".pnpm-store/v3/bun.lock"):
            assert not is_included(f"/app/{rel}", "/app", [], DEFAULT_EXCLUDES), rel

        assert is_included("/app/packages/web/yarn.lock", "/app", [], DEFAULT_EXCLUDES)
