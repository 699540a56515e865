"""Source unit aggregate."""

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from conformcheck.domain.model.declaration import Declaration


@dataclass(frozen=True, slots=True)
class SourceUnit:
    """One scanned source file and its declarations.

    Read-only after creation. Declarations are in source order and
    their `position` matches their index.

    Attributes:
        path: Scanned file
        language: Adapter language that produced the unit
        declarations: Ordered declarations
    """

    path: Path
    language: str
    declarations: tuple[Declaration, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.path is None:
            raise TypeError("path must not be None")
        if not self.language:
            raise ValueError("language must not be empty")
        for index, declaration in enumerate(self.declarations):
            if declaration.position != index:
                raise ValueError(
                    f"declaration '{declaration.qualified_name}' has position "
                    f"{declaration.position}, expected {index}"
                )

    def __iter__(self) -> Iterator[Declaration]:
        return iter(self.declarations)

    def __len__(self) -> int:
        return len(self.declarations)

    @property
    def sort_key(self) -> str:
        """Key for deterministic report ordering (lexicographic path)."""
        return self.path.as_posix()
