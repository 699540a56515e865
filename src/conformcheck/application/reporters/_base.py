"""Base reporter class for output formatting.

Provides default implementation of ReporterProtocol.
Concrete reporters inherit from this.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from pathlib import Path

    from conformcheck.domain.model.check_result import CheckResult
    from conformcheck.domain.model.enums import Severity


class BaseReporter(ABC):
    """Base class for reporters implementing ReporterProtocol.

    Concrete reporters must implement the report() method.

    Example:
        class CountReporter(BaseReporter):
            def report(self, result: CheckResult, threshold: Severity) -> None:
                self._output.write(f"{len(result.at_or_above(threshold))}\\n")
    """

    def __init__(self, output: TextIO | None = None) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
        """
        self._output = output if output is not None else sys.stdout

    @abstractmethod
    def report(self, result: CheckResult, threshold: Severity) -> None:
        """Report check results.

        Args:
            result: Complete check result
            threshold: Minimum severity to show
        """


def display_path(path: Path, root: Path) -> str:
    """Path relative to root in POSIX form, or as given if outside root."""
    if path.is_relative_to(root):
        relative = path.relative_to(root)
        if relative.parts:
            return relative.as_posix()
    return path.as_posix()
