"""Reporter protocol for output formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from conformcheck.domain.model.check_result import CheckResult
    from conformcheck.domain.model.enums import Severity


@runtime_checkable
class ReporterProtocol(Protocol):
    """Contract for reporters.

    conformcheck provides PlainTextReporter, JSONReporter and
    ConsoleReporter. Reporters show only violations at or above
    the threshold and every scan failure.
    """

    def report(self, result: CheckResult, threshold: Severity) -> None:
        """Report check results.

        Args:
            result: Complete check result
            threshold: Minimum severity to show
        """
        ...
