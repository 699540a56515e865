"""Rule violation entity."""

from dataclasses import dataclass
from pathlib import Path

from conformcheck.domain.model.declaration import Declaration
from conformcheck.domain.model.enums import Severity


@dataclass(frozen=True, slots=True)
class Violation:
    """Recorded failure of a declaration to satisfy a rule.

    Attributes:
        rule_id: Violated rule
        declaration: Offending declaration
        file: File of the declaration's unit
        message: Human-readable message
        severity: Copied from the rule (ERROR for faults)
        fault: True if the rule's predicate raised instead of answering
    """

    rule_id: str
    declaration: Declaration
    file: Path
    message: str
    severity: Severity
    fault: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.rule_id:
            raise ValueError("rule_id must not be empty")
        if not self.message:
            raise ValueError("message must not be empty")
        if self.declaration is None:
            raise TypeError("declaration must not be None")

    @property
    def line(self) -> int:
        """Line of the offending declaration."""
        return self.declaration.location.line

    def __str__(self) -> str:
        """Format violation for display."""
        return f"{self.file}:{self.line}: [{self.severity.name}] {self.rule_id}: {self.message}"
