"""Check result aggregate."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from conformcheck.domain.model.enums import Severity
from conformcheck.domain.model.violation import Violation

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_SOURCE_ERRORS = 2


@dataclass(frozen=True, slots=True)
class ScanFailure:
    """File that was recorded and skipped.

    Attributes:
        path: File that failed
        kind: "unreadable" or "malformed"
        reason: Why it failed
    """

    path: Path
    kind: str
    reason: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.kind not in ("unreadable", "malformed"):
            raise ValueError(f"kind must be 'unreadable' or 'malformed', got {self.kind!r}")
        if not self.reason:
            raise ValueError("reason must not be empty")


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of a conformance check.

    Attributes:
        root: Checked root path
        violations: Ordered violations (path, position, rule order)
        failures: Files skipped because they could not be scanned
        units_scanned: Number of successfully scanned units
        rules_run: Number of rules evaluated
    """

    root: Path
    violations: tuple[Violation, ...]
    failures: tuple[ScanFailure, ...]
    units_scanned: int
    rules_run: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.units_scanned < 0:
            raise ValueError(f"units_scanned must be >= 0, got {self.units_scanned}")
        if self.rules_run < 0:
            raise ValueError(f"rules_run must be >= 0, got {self.rules_run}")

    def at_or_above(self, threshold: Severity) -> tuple[Violation, ...]:
        """Violations whose severity reaches threshold, order preserved."""
        return tuple(v for v in self.violations if v.severity.at_least(threshold))

    def passed(self, threshold: Severity) -> bool:
        """True if nothing failed at threshold and every file was scanned."""
        return not self.failures and not self.at_or_above(threshold)

    def exit_code(self, threshold: Severity) -> int:
        """0 clean, 1 violations at threshold, 2 any scan failure."""
        if self.failures:
            return EXIT_SOURCE_ERRORS
        if self.at_or_above(threshold):
            return EXIT_VIOLATIONS
        return EXIT_OK

    @property
    def error_count(self) -> int:
        """Number of ERROR severity violations."""
        return sum(1 for v in self.violations if v.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        """Number of WARNING severity violations."""
        return sum(1 for v in self.violations if v.severity == Severity.WARNING)

    @classmethod
    def empty(cls, root: Path) -> CheckResult:
        """Create empty check result (passed, no violations)."""
        return cls(root=root, violations=(), failures=(), units_scanned=0, rules_run=0)
