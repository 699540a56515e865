"""Reporters for conformance check results."""

from __future__ import annotations

from typing import TextIO

from conformcheck.application.reporters._base import BaseReporter
from conformcheck.application.reporters.console import ConsoleReporter
from conformcheck.application.reporters.json_reporter import JSONReporter
from conformcheck.application.reporters.plain_text import PlainTextReporter

_REPORTERS: dict[str, type[BaseReporter]] = {
    "text": PlainTextReporter,
    "json": JSONReporter,
    "rich": ConsoleReporter,
}


def reporter_for(output_format: str, output: TextIO | None = None) -> BaseReporter:
    """Reporter for a configured output format.

    Raises:
        ValueError: If output_format is unknown
    """
    try:
        reporter_cls = _REPORTERS[output_format]
    except KeyError:
        raise ValueError(f"unknown output format {output_format!r}") from None
    return reporter_cls(output)


__all__ = [
    "BaseReporter",
    "ConsoleReporter",
    "JSONReporter",
    "PlainTextReporter",
    "reporter_for",
]
