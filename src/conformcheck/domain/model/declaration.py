"""Declaration entity."""

from dataclasses import dataclass

from conformcheck.domain.model.enums import DeclarationKind, Feature, Visibility
from conformcheck.domain.model.location import Location


@dataclass(frozen=True, slots=True)
class Declaration:
    """Named structural unit (class, method, field) of a source file.

    Attributes:
        name: Simple name
        qualified_name: Name qualified by enclosing declarations
        kind: CLASS/METHOD/CONSTRUCTOR/FUNCTION/FIELD
        visibility: Access level
        documented: True if documentation is literally present
        features: Extracted structural signals
        location: Position of the declaration
        position: Ordinal of the declaration within its unit (0-based)
    """

    name: str
    qualified_name: str
    kind: DeclarationKind
    visibility: Visibility
    documented: bool
    features: frozenset[Feature]
    location: Location
    position: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if not self.qualified_name:
            raise ValueError("qualified_name must not be empty")
        if self.position < 0:
            raise ValueError(f"position must be >= 0, got {self.position}")

    @property
    def is_public(self) -> bool:
        """True if visibility is PUBLIC."""
        return self.visibility == Visibility.PUBLIC

    def has(self, feature: Feature) -> bool:
        """True if the declaration carries feature."""
        return feature in self.features
