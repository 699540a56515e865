"""JSON reporter for machine-readable output.

Schema:
    {
      "violations": [{"rule", "file", "line", "message", "severity"}],
      "errors": [{"file", "kind", "reason"}]
    }
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, TextIO

from conformcheck.application.reporters._base import BaseReporter, display_path

if TYPE_CHECKING:
    from pathlib import Path

    from conformcheck.domain.model.check_result import CheckResult, ScanFailure
    from conformcheck.domain.model.enums import Severity
    from conformcheck.domain.model.violation import Violation


class JSONReporter(BaseReporter):
    """JSON reporter for machine-readable output.

    Violations keep the evaluator's order.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        *,
        indent: int | None = 2,
    ) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
            indent: JSON indentation (default: 2, None for compact)
        """
        super().__init__(output)
        self._indent = indent

    def report(self, result: CheckResult, threshold: Severity) -> None:
        """Report check results as JSON.

        Args:
            result: Complete check result
            threshold: Minimum severity to show
        """
        data = {
            "violations": [self._violation_to_dict(v, result.root) for v in result.at_or_above(threshold)],
            "errors": [self._failure_to_dict(f, result.root) for f in result.failures],
        }
        json.dump(data, self._output, indent=self._indent)
        self._output.write("\n")

    def _violation_to_dict(self, violation: Violation, root: Path) -> dict[str, object]:
        return {
            "rule": violation.rule_id,
            "file": display_path(violation.file, root),
            "line": violation.line,
            "message": violation.message,
            "severity": violation.severity.value,
        }

    def _failure_to_dict(self, failure: ScanFailure, root: Path) -> dict[str, object]:
        return {
            "file": display_path(failure.path, root),
            "kind": failure.kind,
            "reason": failure.reason,
        }
