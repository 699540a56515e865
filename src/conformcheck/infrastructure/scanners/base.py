"""Base utilities for language adapters."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from conformcheck.domain.exceptions.source import UnreadableSourceError
from conformcheck.domain.model.declaration import Declaration
from conformcheck.domain.model.location import Location

if TYPE_CHECKING:
    from pathlib import Path

    from conformcheck.domain.model.enums import DeclarationKind, Feature, Visibility

logger = logging.getLogger(__name__)


def read_source(path: Path) -> str:
    """Read UTF-8 source text.

    Raises:
        UnreadableSourceError: If file is missing, unreadable or not UTF-8
    """
    try:
        source = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise UnreadableSourceError(path, "file not found") from e
    except IsADirectoryError as e:
        raise UnreadableSourceError(path, "is a directory") from e
    except PermissionError as e:
        raise UnreadableSourceError(path, "permission denied") from e
    except UnicodeDecodeError as e:
        raise UnreadableSourceError(path, f"encoding error: {e.reason}") from e
    except OSError as e:
        raise UnreadableSourceError(path, e.strerror or type(e).__name__) from e

    logger.debug("read %s (%d chars)", path, len(source))
    return source


@dataclass(slots=True)
class DeclarationCollector:
    """Accumulates declarations in source order, assigning positions.

    Attributes:
        path: File the declarations belong to
    """

    path: Path
    _declarations: list[Declaration] = field(default_factory=list)

    def add(
        self,
        *,
        name: str,
        qualified_name: str,
        kind: DeclarationKind,
        visibility: Visibility,
        documented: bool,
        features: frozenset[Feature],
        line: int,
        column: int,
    ) -> Declaration:
        """Append declaration at the next position."""
        declaration = Declaration(
            name=name,
            qualified_name=qualified_name,
            kind=kind,
            visibility=visibility,
            documented=documented,
            features=features,
            location=Location(file=self.path, line=line, column=column),
            position=len(self._declarations),
        )
        self._declarations.append(declaration)
        return declaration

    def declarations(self) -> tuple[Declaration, ...]:
        """Collected declarations in position order."""
        return tuple(self._declarations)
