"""Domain enumerations."""

from __future__ import annotations

from enum import Enum, auto


class Severity(Enum):
    """Rule violation severity.

    Ordered: WARNING < ERROR. Threshold comparisons use `rank`.
    """

    WARNING = "warning"  # reported, fails only at warning threshold
    ERROR = "error"  # always fails the run

    @property
    def rank(self) -> int:
        """Numeric rank for threshold comparison."""
        return _SEVERITY_RANK[self]

    def at_least(self, threshold: Severity) -> bool:
        """True if this severity is at or above threshold."""
        return self.rank >= threshold.rank

    @classmethod
    def parse(cls, value: str) -> Severity:
        """Parse case-insensitive severity name.

        Raises:
            ValueError: If value names no severity
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValueError(f"unknown severity '{value}', expected one of: {choices}") from None


_SEVERITY_RANK = {Severity.WARNING: 0, Severity.ERROR: 1}


class DeclarationKind(Enum):
    """Kind of structural unit extracted from source."""

    CLASS = auto()
    METHOD = auto()
    CONSTRUCTOR = auto()
    FUNCTION = auto()  # module-level callable
    FIELD = auto()

    @property
    def is_callable(self) -> bool:
        """True for methods, constructors and functions."""
        return self in (DeclarationKind.METHOD, DeclarationKind.CONSTRUCTOR, DeclarationKind.FUNCTION)


class Visibility(Enum):
    """Declaration access level."""

    PUBLIC = auto()
    PROTECTED = auto()
    PACKAGE = auto()  # Java default access
    PRIVATE = auto()


class Feature(Enum):
    """Structural signal extracted from a declaration or its body."""

    CATCHES_BROAD = "catches-broad"
    SWALLOWS_EXCEPTION = "swallows-exception"
    THROWS_BROAD = "throws-broad"
    UNSCOPED_RESOURCE = "unscoped-resource"
    SCOPED_RESOURCE = "scoped-resource"
    RETURNS_RESOURCE = "returns-resource"
    TEST = "test"
    OVERRIDE = "override"
    MUTABLE = "mutable"
