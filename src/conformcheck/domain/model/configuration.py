"""Check configuration.

Immutable settings resolved from defaults, pyproject.toml,
environment and command line (in increasing precedence).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from conformcheck.domain.model.enums import Severity

OUTPUT_FORMATS = frozenset({"text", "json", "rich"})

DEFAULT_TEST_PATTERNS: Mapping[str, str] = MappingProxyType(
    {
        "java": r"^should[A-Z0-9]\w*$",
        "python": r"^test_[a-z0-9_]+$",
    }
)


@dataclass(frozen=True, slots=True)
class CheckConfig:
    """Checker configuration DTO.

    Attributes:
        severity: Threshold; violations below it are not reported
        output_format: "text", "json" or "rich"
        jobs: Worker threads for scan/evaluate. None = executor default
        disabled_rules: Rule ids left out of the registry
        test_patterns: Language -> regex that test names must match
    """

    severity: Severity = Severity.WARNING
    output_format: str = "text"
    jobs: int | None = None
    disabled_rules: frozenset[str] = frozenset()
    test_patterns: Mapping[str, str] = field(default_factory=lambda: DEFAULT_TEST_PATTERNS)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.severity, Severity):
            raise TypeError(f"severity must be Severity, got {type(self.severity).__name__}")
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"output_format must be one of {sorted(OUTPUT_FORMATS)}, got {self.output_format!r}"
            )
        if self.jobs is not None and self.jobs < 1:
            raise ValueError(f"jobs must be >= 1, got {self.jobs}")
        for language, pattern in self.test_patterns.items():
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"test pattern for {language} is not a valid regex: {e}") from e
