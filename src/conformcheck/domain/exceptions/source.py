"""Source scanning exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from conformcheck.domain.exceptions.base import ConformCheckError

if TYPE_CHECKING:
    from pathlib import Path


class SourceError(ConformCheckError):
    """Error while turning a source file into a SourceUnit.

    Attributes:
        path: File that failed
        reason: Why it failed
    """

    kind = "source"

    def __init__(self, path: Path, reason: str) -> None:
        # FAIL-FIRST: validate required parameters
        if path is None:
            raise TypeError("path must not be None")
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.path = path
        self.reason = reason
        super().__init__(f"{self._verb} {path}: {reason}")

    @property
    def _verb(self) -> str:
        return "Cannot process"


class UnreadableSourceError(SourceError):
    """Path cannot be read (missing, permission denied, undecodable)."""

    kind = "unreadable"

    @property
    def _verb(self) -> str:
        return "Cannot read"


class MalformedSourceError(SourceError):
    """Source cannot be tokenized into a minimal declaration tree.

    Reserved for unrecoverable tokenization failures. Unknown syntax
    degrades to fewer facts instead.

    Attributes:
        line: 1-based line where tokenization stopped, if known
    """

    kind = "malformed"

    def __init__(self, path: Path, reason: str, line: int | None = None) -> None:
        if line is not None and line <= 0:
            raise ValueError(f"line must be > 0, got {line}")

        self.line = line
        super().__init__(path, reason if line is None else f"{reason} (line {line})")

    @property
    def _verb(self) -> str:
        return "Failed to tokenize"
