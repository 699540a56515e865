"""Plain text reporter using print().

One line per violation, compiler style: `file:line: severity rule: message`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from conformcheck.application.reporters._base import BaseReporter, display_path

if TYPE_CHECKING:
    from conformcheck.domain.model.check_result import CheckResult
    from conformcheck.domain.model.enums import Severity


class PlainTextReporter(BaseReporter):
    """Plain text reporter using print()."""

    def report(self, result: CheckResult, threshold: Severity) -> None:
        """Report check results as plain text.

        Args:
            result: Complete check result
            threshold: Minimum severity to show
        """
        violations = result.at_or_above(threshold)

        for violation in violations:
            file = display_path(violation.file, result.root)
            self._write(f"{file}:{violation.line}: {violation.severity.value} {violation.rule_id}: {violation.message}")

        for failure in result.failures:
            self._write(f"{display_path(failure.path, result.root)}: {failure.kind}: {failure.reason}")

        self._report_summary(result, len(violations))

    def _write(self, text: str = "") -> None:
        """Write line to output."""
        print(text, file=self._output)

    def _report_summary(self, result: CheckResult, shown: int) -> None:
        parts = [
            f"{result.units_scanned} file(s) checked",
            f"{result.rules_run} rule(s)",
            f"{shown} violation(s)",
        ]
        if result.failures:
            parts.append(f"{len(result.failures)} file(s) skipped")
        self._write(", ".join(parts))
