"""
LockGuard Base Parser

A parser turns the raw bytes of one lockfile into the (name, version)
pairs it resolves.

Parsers never raise on bad input: a corrupt lockfile gives an empty,
failed ParseResult so the rest of the scan can carry on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional

from lockguard.core.database import normalize_name
from lockguard.core.models import ResolutionPair


@dataclass(frozen=True)
class ParseResult:
    pairs: tuple[ResolutionPair, ...] = ()
    ok: bool = True
    error: Optional[str] = None

    @classmethod
    def success(cls, pairs: Iterable[ResolutionPair]) -> "ParseResult":
        return cls(pairs=tuple(pairs))

    @classmethod
    def failure(cls, error: str) -> "ParseResult":
        return cls(ok=False, error=error)


class BaseParser(ABC):
    """
    Lockfile parser interface.
    Each parser must implement parse().
    """

    name: str = "base"
    filenames: tuple[str, ...] = ()
    # recognized lockfiles that are never read
    binary_filenames: tuple[str, ...] = ()

    def skips(self, filename: str) -> bool:
        return filename in self.binary_filenames

    @abstractmethod
    def parse(self, content: bytes) -> ParseResult:
        """
        Extract resolution pairs from a lockfile's bytes.
        """
        raise NotImplementedError

    @staticmethod
    def _pair(name: str, version: str) -> ResolutionPair:
        return ResolutionPair(normalize_name(name), version)

    @staticmethod
    def _decode(content: bytes) -> str:
        """Decode lockfile bytes, dropping a UTF-8 BOM. Raises UnicodeDecodeError."""
        return content.decode("utf-8-sig")
