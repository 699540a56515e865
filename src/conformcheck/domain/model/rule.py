"""Rule entity."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from conformcheck.domain.model.enums import Severity

if TYPE_CHECKING:
    from conformcheck.domain.model.declaration import Declaration
    from conformcheck.domain.model.source_unit import SourceUnit

type Predicate = Callable[[Declaration, SourceUnit], Iterable[str]]
"""Returns one message per violation; empty when the declaration conforms."""


@dataclass(frozen=True, slots=True)
class Rule:
    """Checkable policy.

    Predicates only produce messages. The evaluator turns each message
    into a Violation bound to this rule and the checked declaration,
    so violations can never reference unknown rules or declarations.

    Attributes:
        rule_id: Unique identifier (e.g. "no-broad-catch")
        description: Human-readable policy statement
        severity: WARNING or ERROR
        predicate: Fact-set check
    """

    rule_id: str
    description: str
    severity: Severity
    predicate: Predicate

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.rule_id:
            raise ValueError("rule_id must not be empty")
        if not self.description:
            raise ValueError("description must not be empty")
        if not isinstance(self.severity, Severity):
            raise TypeError(f"severity must be Severity, got {type(self.severity).__name__}")
        if not callable(self.predicate):
            raise TypeError("predicate must be callable")

    def check(self, declaration: Declaration, unit: SourceUnit) -> tuple[str, ...]:
        """Run predicate and materialize its messages."""
        return tuple(self.predicate(declaration, unit))
