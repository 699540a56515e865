"""Command-line interface (Typer).

Exit codes:
    0   no violation at or above the severity threshold
    1   violations at or above the threshold
    2   a source file could not be read or tokenized, or bad configuration
    3   rule catalog misconfigured (duplicate rule id)
    130 interrupted; no report is printed
"""

import logging
import sys
from pathlib import Path
import typer
from rich.console import Console
from rich.table import Table

from conformcheck.application.registry import RuleRegistry, default_registry
from conformcheck.application.reporters import reporter_for
from conformcheck.application.services import ConformanceChecker, SourceScanner
from conformcheck.domain.exceptions import ConfigurationError, DuplicateRuleError
from conformcheck.domain.model.check_result import EXIT_SOURCE_ERRORS
from conformcheck.domain.model.configuration import CheckConfig
from conformcheck.infrastructure.config import load_config
from conformcheck.infrastructure.scanners import JavaScanner, PythonScanner

EXIT_CONFIG_ERROR = EXIT_SOURCE_ERRORS
EXIT_REGISTRY_ERROR = 3
EXIT_INTERRUPTED = 130

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="conformcheck",
    help="Check a codebase against structurally checkable code-of-conduct rules.",
    add_completion=False,
    no_args_is_help=True,
)


def create_checker(config: CheckConfig) -> ConformanceChecker:
    """Composition root: registry, language adapters, checker.

    Raises:
        DuplicateRuleError: If the rule catalog repeats an identifier
    """
    registry = default_registry(config)
    scanner = SourceScanner([JavaScanner(), PythonScanner()])
    return ConformanceChecker(registry, scanner, jobs=config.jobs)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def check(
    root: Path = typer.Argument(..., help="Directory or file to check"),  # noqa: B008
    severity: str | None = typer.Option(
        None, "--severity", help="Threshold: warning or error (env: CONFORMCHECK_SEVERITY)"
    ),
    output_format: str | None = typer.Option(None, "--format", help="Output: text, json or rich"),
    jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help="Worker threads"),
    disable: list[str] | None = typer.Option(  # noqa: B008
        None, "--disable", help="Rule id to skip (repeatable)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
) -> None:
    """Scan ROOT and report rule violations."""
    _configure_logging(verbose)

    try:
        config = load_config(
            root,
            severity=severity,
            output_format=output_format,
            jobs=jobs,
            disable=disable or (),
        )
    except ConfigurationError as e:
        typer.echo(f"conformcheck: {e}", err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from e

    try:
        checker = create_checker(config)
    except DuplicateRuleError as e:
        typer.echo(f"conformcheck: fatal: {e}", err=True)
        raise typer.Exit(code=EXIT_REGISTRY_ERROR) from e

    try:
        result = checker.check(root)
    except KeyboardInterrupt:
        typer.echo("conformcheck: interrupted, no report produced", err=True)
        raise typer.Exit(code=EXIT_INTERRUPTED) from None

    reporter_for(config.output_format, sys.stdout).report(result, config.severity)
    raise typer.Exit(code=result.exit_code(config.severity))


@app.command()
def rules() -> None:
    """List the shipped rule catalog."""
    _print_rules(default_registry(), Console())


def _print_rules(registry: RuleRegistry, console: Console) -> None:
    table = Table(title="conformcheck rules", header_style="bold")
    table.add_column("Rule", style="cyan")
    table.add_column("Severity")
    table.add_column("Description")
    for rule in registry.all():
        table.add_row(rule.rule_id, rule.severity.value, rule.description)
    console.print(table)


def main() -> None:
    """Console script entry point."""
    app()
