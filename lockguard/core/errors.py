"""
LockGuard Errors

Fatal input errors abort a run before any lockfile is scanned.
Per-file problems (malformed lockfiles, unreadable directories) are
never raised; they are logged and the file contributes nothing.
"""

from __future__ import annotations


class LockGuardError(Exception):
    """Base class for all LockGuard errors."""


class InputValidationError(LockGuardError):
    """Invalid input that must stop the run before scanning starts."""


class RootNotFoundError(InputValidationError):
    def __init__(self, root: object) -> None:
        super().__init__(f"root directory not found: {root}")
        self.root = root


class InvalidManagerError(InputValidationError):
    def __init__(self, manager: str, valid: tuple[str, ...]) -> None:
        if manager:
            msg = f"invalid manager '{manager}'. Valid options: {', '.join(valid)}"
        else:
            msg = "no valid managers specified"
        super().__init__(msg)
        self.manager = manager


class DatabaseError(InputValidationError):
    """The compromised-package list could not be loaded."""


class DatabaseNotFoundError(DatabaseError):
    def __init__(self, path: object) -> None:
        super().__init__(f"list file not found: {path}")
        self.path = path


class DatabaseReadError(DatabaseError):
    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"failed to read list file {path}: {reason}")
        self.path = path


class EmptyDatabaseError(DatabaseError):
    def __init__(self, source: str) -> None:
        super().__init__(f"no valid package@version entries found in {source}")
        self.source = source
