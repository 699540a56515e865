"""Load CheckConfig from pyproject.toml, environment and overrides.

Precedence (lowest to highest):
    defaults -> [tool.conformcheck] -> CONFORMCHECK_SEVERITY -> overrides
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import replace
from pathlib import Path

from conformcheck.domain.exceptions.configuration import ConfigurationError
from conformcheck.domain.model.configuration import DEFAULT_TEST_PATTERNS, CheckConfig
from conformcheck.domain.model.enums import Severity

logger = logging.getLogger(__name__)

SEVERITY_ENV = "CONFORMCHECK_SEVERITY"
TOOL_SECTION = "conformcheck"


def find_pyproject(start: Path) -> Path | None:
    """Nearest pyproject.toml at or above start."""
    current = start if start.is_dir() else start.parent
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_tool_section(pyproject: Path) -> dict[str, object]:
    """[tool.conformcheck] table, empty if absent.

    Raises:
        ConfigurationError: If the file is not valid TOML
    """
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(str(pyproject), f"invalid TOML: {e}") from e

    section = data.get("tool", {}).get(TOOL_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigurationError(f"tool.{TOOL_SECTION}", "must be a table")
    return section


def load_config(
    root: Path,
    *,
    severity: str | None = None,
    output_format: str | None = None,
    jobs: int | None = None,
    disable: Iterable[str] = (),
    environ: Mapping[str, str] | None = None,
) -> CheckConfig:
    """Resolve configuration for a check of root.

    Args:
        root: Checked directory or file; pyproject.toml is searched upwards
        severity: Threshold override ("warning"/"error")
        output_format: Format override ("text"/"json"/"rich")
        jobs: Worker thread override
        disable: Extra rule ids to disable
        environ: Environment (default: os.environ)

    Returns:
        Validated CheckConfig

    Raises:
        ConfigurationError: On any invalid value
    """
    environ = os.environ if environ is None else environ
    config = CheckConfig()

    pyproject = find_pyproject(root)
    if pyproject is not None:
        section = load_tool_section(pyproject)
        if section:
            logger.debug("using [tool.%s] from %s", TOOL_SECTION, pyproject)
            config = _apply_section(config, section)

    env_severity = environ.get(SEVERITY_ENV)
    if env_severity:
        config = replace(config, severity=_parse_severity(SEVERITY_ENV, env_severity))

    if severity is not None:
        config = replace(config, severity=_parse_severity("--severity", severity))
    if output_format is not None:
        config = _replace(config, "--format", output_format=output_format)
    if jobs is not None:
        config = _replace(config, "--jobs", jobs=jobs)
    disable = frozenset(disable)
    if disable:
        config = replace(config, disabled_rules=config.disabled_rules | disable)

    return config


def _apply_section(config: CheckConfig, section: Mapping[str, object]) -> CheckConfig:
    known = {"severity", "format", "jobs", "disable", "test-patterns"}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ConfigurationError(f"tool.{TOOL_SECTION}", f"unknown keys: {', '.join(unknown)}")

    if "severity" in section:
        config = replace(config, severity=_parse_severity("severity", _expect(section, "severity", str)))
    if "format" in section:
        config = _replace(config, "format", output_format=_expect(section, "format", str))
    if "jobs" in section:
        config = _replace(config, "jobs", jobs=_expect(section, "jobs", int))
    if "disable" in section:
        rules = _expect(section, "disable", list)
        if not all(isinstance(r, str) for r in rules):
            raise ConfigurationError("disable", "must be a list of rule ids")
        config = replace(config, disabled_rules=frozenset(rules))
    if "test-patterns" in section:
        patterns = _expect(section, "test-patterns", dict)
        if not all(isinstance(p, str) for p in patterns.values()):
            raise ConfigurationError("test-patterns", "values must be regex strings")
        config = _replace(config, "test-patterns", test_patterns={**DEFAULT_TEST_PATTERNS, **patterns})
    return config


def _expect[T](section: Mapping[str, object], key: str, kind: type[T]) -> T:
    value = section[key]
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigurationError(key, f"expected {kind.__name__}, got {type(value).__name__}")
    return value


def _parse_severity(key: str, value: str) -> Severity:
    try:
        return Severity.parse(value)
    except ValueError as e:
        raise ConfigurationError(key, str(e)) from e


def _replace(config: CheckConfig, key: str, **changes: object) -> CheckConfig:
    """dataclasses.replace, reporting validation errors against key."""
    try:
        return replace(config, **changes)
    except ValueError as e:
        raise ConfigurationError(key, str(e)) from e
