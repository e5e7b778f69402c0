"""
Tests for the Lockfile Locator
"""

import os
import sys
from pathlib import Path

import pytest

from lockguard.core.errors import InvalidManagerError, RootNotFoundError
from lockguard.core.locator import DEFAULT_EXCLUDES, find_lockfiles, lockfile_names


class TestLockfileNames:
    """Tests for lockfile_names."""

    def test_all_managers(self):
        names = lockfile_names(["yarn", "npm", "pnpm", "bun"])
        assert names == {
            "yarn.lock",
            "package-lock.json",
            "npm-shrinkwrap.json",
            "pnpm-lock.yaml",
            "bun.lock",
            "bun.lockb",
        }

    def test_single_manager(self):
        assert lockfile_names(["npm"]) == {"package-lock.json", "npm-shrinkwrap.json"}

    def test_invalid_manager(self):
        """Test an unknown manager is rejected."""
        with pytest.raises(InvalidManagerError, match="cargo"):
            lockfile_names(["yarn", "cargo"])

    def test_empty_selection(self):
        with pytest.raises(InvalidManagerError):
            lockfile_names([])


class TestFindLockfiles:
    """Tests for find_lockfiles."""

    def test_finds_lockfiles_recursively(self, temp_dir: Path, write_file):
        """Test lockfiles are found in nested directories and sorted."""
        write_file("yarn.lock", "")
        write_file("packages/web/package-lock.json", "{}")
        write_file("packages/api/pnpm-lock.yaml", "")
        write_file("packages/cli/bun.lockb", "")
        write_file("packages/cli/README.md", "")

        found = find_lockfiles(temp_dir, ["yarn", "npm", "pnpm", "bun"])

        rel = [p.relative_to(temp_dir).as_posix() for p in found]
        assert rel == sorted(rel)
        assert set(rel) == {
            "yarn.lock",
            "packages/web/package-lock.json",
            "packages/api/pnpm-lock.yaml",
            "packages/cli/bun.lockb",
        }
        assert all(p.is_absolute() for p in found)

    def test_only_requested_managers(self, temp_dir: Path, write_file):
        write_file("yarn.lock", "")
        write_file("package-lock.json", "{}")

        found = find_lockfiles(temp_dir, ["yarn"])
        assert [p.name for p in found] == ["yarn.lock"]

    def test_default_excludes_applied(self, temp_dir: Path, write_file):
        """Test node_modules and build output directories are skipped."""
        write_file("yarn.lock", "")
        write_file("node_modules/dep/yarn.lock", "")
        write_file("dist/yarn.lock", "")
        write_file("apps/site/.turbo/yarn.lock", "")

        found = find_lockfiles(temp_dir, ["yarn"], exclude=DEFAULT_EXCLUDES)
        assert [p.relative_to(temp_dir).as_posix() for p in found] == ["yarn.lock"]

    def test_include_patterns(self, temp_dir: Path, write_file):
        write_file("yarn.lock", "")
        write_file("apps/web/yarn.lock", "")
        write_file("libs/core/yarn.lock", "")

        found = find_lockfiles(temp_dir, ["yarn"], include=["apps/**"])
        assert [p.relative_to(temp_dir).as_posix() for p in found] == ["apps/web/yarn.lock"]

    def test_directory_named_like_lockfile_ignored(self, temp_dir: Path, write_file):
        (temp_dir / "yarn.lock").mkdir()
        write_file("yarn.lock/inner.txt", "")

        assert find_lockfiles(temp_dir, ["yarn"]) == []

    def test_missing_root(self, temp_dir: Path):
        with pytest.raises(RootNotFoundError):
            find_lockfiles(temp_dir / "missing", ["yarn"])

    def test_invalid_manager(self, temp_dir: Path):
        with pytest.raises(InvalidManagerError):
            find_lockfiles(temp_dir, ["maven"])

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="directory permissions not enforced",
    )
    def test_unreadable_directory_skipped(self, temp_dir: Path, write_file):
        """Test an unreadable subdirectory does not abort the walk."""
        write_file("ok/yarn.lock", "")
        write_file("locked/yarn.lock", "")
        locked = temp_dir / "locked"
        locked.chmod(0)
        try:
            found = find_lockfiles(temp_dir, ["yarn"])
        finally:
            locked.chmod(0o755)

        assert [p.relative_to(temp_dir).as_posix() for p in found] == ["ok/yarn.lock"]
