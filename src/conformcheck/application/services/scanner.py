"""Scanner service: dispatch files to language adapters by suffix."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from conformcheck.domain.exceptions.source import UnreadableSourceError

if TYPE_CHECKING:
    from pathlib import Path

    from conformcheck.domain.model.source_unit import SourceUnit
    from conformcheck.domain.ports.scanner import LanguageScannerProtocol


class SourceScanner:
    """Routes each path to the adapter registered for its suffix."""

    def __init__(self, adapters: Iterable[LanguageScannerProtocol]) -> None:
        """Initialize with adapters.

        Raises:
            ValueError: If no adapters given or two claim the same suffix
        """
        self._by_suffix: dict[str, LanguageScannerProtocol] = {}
        for adapter in adapters:
            for suffix in adapter.suffixes:
                if suffix in self._by_suffix:
                    raise ValueError(f"suffix {suffix!r} claimed by more than one adapter")
                self._by_suffix[suffix] = adapter

        if not self._by_suffix:
            raise ValueError("at least one adapter is required")

    @property
    def suffixes(self) -> frozenset[str]:
        """All suffixes with an adapter."""
        return frozenset(self._by_suffix)

    def scan(self, path: Path) -> SourceUnit:
        """Scan path with the adapter for its suffix.

        Raises:
            UnreadableSourceError: If no adapter handles the suffix, or the
                file cannot be read
            MalformedSourceError: If the adapter cannot tokenize the file
        """
        adapter = self._by_suffix.get(path.suffix)
        if adapter is None:
            raise UnreadableSourceError(path, f"unsupported file type {path.suffix or '(none)'!r}")
        return adapter.scan(path)
