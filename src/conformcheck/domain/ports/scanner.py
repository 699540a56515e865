"""Scanner port: contract for language adapters.

Each adapter maps one language's constructs to abstract facts
(Declaration, Feature) using the Taxonomy it was built with.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pathlib import Path

    from conformcheck.domain.model.source_unit import SourceUnit
    from conformcheck.domain.model.taxonomy import Taxonomy


class LanguageScannerProtocol(Protocol):
    """Contract for language adapters.

    Adapters are stateless between scan() calls so the checker can
    scan files in parallel.

    Example:
        class KotlinScanner:
            suffixes = frozenset({".kt"})

            def __init__(self, taxonomy: Taxonomy) -> None:
                self.taxonomy = taxonomy

            def scan(self, path: Path) -> SourceUnit:
                source = read_source(path)
                ...
    """

    suffixes: frozenset[str]
    """File suffixes handled by this adapter (with leading dot)."""

    taxonomy: Taxonomy
    """Vocabulary used to classify constructs."""

    def scan(self, path: Path) -> SourceUnit:
        """Scan one file.

        Args:
            path: Source file

        Returns:
            SourceUnit with declarations in source order

        Raises:
            UnreadableSourceError: If path cannot be read
            MalformedSourceError: If tokenization fails unrecoverably
        """
        ...
