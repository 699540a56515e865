"""Console reporter: CheckResult -> rich tables grouped by file."""

from __future__ import annotations

from itertools import groupby
from typing import TYPE_CHECKING, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from conformcheck.application.reporters._base import BaseReporter, display_path
from conformcheck.domain.model.enums import Severity

if TYPE_CHECKING:
    from conformcheck.domain.model.check_result import CheckResult
    from conformcheck.domain.model.violation import Violation

_SEVERITY_STYLE = {Severity.ERROR: "bold red", Severity.WARNING: "yellow"}


class ConsoleReporter(BaseReporter):
    """Console reporter: one rich table per file, then a summary."""

    def __init__(self, output: TextIO | None = None, *, width: int = 120) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
            width: Console width in columns
        """
        super().__init__(output)
        self._console = Console(file=self._output, width=width, highlight=False)

    def report(self, result: CheckResult, threshold: Severity) -> None:
        """Render check results.

        Args:
            result: Complete check result
            threshold: Minimum severity to show
        """
        violations = result.at_or_above(threshold)

        for file, group in groupby(violations, key=lambda v: display_path(v.file, result.root)):
            self._render_file(file, tuple(group))

        if result.failures:
            self._render_failures(result)

        self._render_summary(result, violations)

    def _render_file(self, file: str, violations: tuple[Violation, ...]) -> None:
        self._console.print(f"[bold]{escape(file)}[/bold]")
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("line", style="dim", justify="right")
        table.add_column("severity")
        table.add_column("rule", style="cyan")
        table.add_column("message")

        for violation in violations:
            style = _SEVERITY_STYLE[violation.severity]
            table.add_row(
                str(violation.line),
                f"[{style}]{violation.severity.value}[/{style}]",
                violation.rule_id,
                Text(violation.message),
            )

        self._console.print(table)
        self._console.print()

    def _render_failures(self, result: CheckResult) -> None:
        self._console.print(f"[bold red]SKIPPED FILES[/bold red] ({len(result.failures)})")
        for failure in result.failures:
            line = f"  {display_path(failure.path, result.root)}: {failure.kind}: {failure.reason}"
            self._console.print(line, markup=False)
        self._console.print()

    def _render_summary(self, result: CheckResult, violations: tuple[Violation, ...]) -> None:
        errors = sum(1 for v in violations if v.severity == Severity.ERROR)
        warnings = len(violations) - errors
        self._console.rule("[bold]CONFORMANCE[/bold]")
        self._console.print(
            f"[bold]Files:[/bold] {result.units_scanned}  "
            f"[bold]Rules:[/bold] {result.rules_run}  "
            f"[bold]Errors:[/bold] {errors}  "
            f"[bold]Warnings:[/bold] {warnings}"
        )
