"""Tests for infrastructure/config/loader.py."""

from pathlib import Path

import pytest

from conformcheck.domain.exceptions import ConfigurationError
from conformcheck.domain.model.enums import Severity
from conformcheck.infrastructure.config import SEVERITY_ENV, find_pyproject, load_config


def write_pyproject(root: Path, body: str) -> Path:
    path = root / "pyproject.toml"
    path.write_text(body, encoding="utf-8")
    return path


class TestFindPyproject:
    """Tests for find_pyproject()."""

    def test_found_in_parent(self, tmp_path: Path) -> None:
        expected = write_pyproject(tmp_path, "")
        nested = tmp_path / "src" / "pkg"
        nested.mkdir(parents=True)
        assert find_pyproject(nested) == expected

    def test_file_start(self, tmp_path: Path) -> None:
        expected = write_pyproject(tmp_path, "")
        source = tmp_path / "A.java"
        source.write_text("")
        assert find_pyproject(source) == expected


class TestLoadConfig:
    """Tests for load_config() precedence and validation."""

    def test_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path, environ={})
        assert config.severity == Severity.WARNING
        assert config.output_format == "text"
        assert config.disabled_rules == frozenset()

    def test_pyproject_section(self, tmp_path: Path) -> None:
        write_pyproject(
            tmp_path,
            '[tool.conformcheck]\nseverity = "error"\nformat = "json"\njobs = 2\n'
            'disable = ["no-broad-throw"]\n\n[tool.conformcheck.test-patterns]\njava = "^test\\\\w+$"\n',
        )

        config = load_config(tmp_path, environ={})

        assert config.severity == Severity.ERROR
        assert config.output_format == "json"
        assert config.jobs == 2
        assert config.disabled_rules == frozenset({"no-broad-throw"})
        assert config.test_patterns["java"] == r"^test\w+$"
        assert "python" in config.test_patterns

    def test_env_overrides_pyproject(self, tmp_path: Path) -> None:
        write_pyproject(tmp_path, '[tool.conformcheck]\nseverity = "error"\n')
        config = load_config(tmp_path, environ={SEVERITY_ENV: "warning"})
        assert config.severity == Severity.WARNING

    def test_flags_override_env(self, tmp_path: Path) -> None:
        config = load_config(tmp_path, severity="error", environ={SEVERITY_ENV: "warning"})
        assert config.severity == Severity.ERROR

    def test_disable_merges(self, tmp_path: Path) -> None:
        write_pyproject(tmp_path, '[tool.conformcheck]\ndisable = ["a"]\n')
        config = load_config(tmp_path, disable=["b"], environ={})
        assert config.disabled_rules == frozenset({"a", "b"})

    def test_other_tool_sections_ignored(self, tmp_path: Path) -> None:
        write_pyproject(tmp_path, '[tool.ruff]\nline-length = 100\n')
        assert load_config(tmp_path, environ={}).severity == Severity.WARNING

    @pytest.mark.parametrize(
        ("body", "key"),
        [
            ('[tool.conformcheck]\nseverity = "loud"\n', "severity"),
            ('[tool.conformcheck]\nformat = "xml"\n', "format"),
            ("[tool.conformcheck]\njobs = true\n", "jobs"),
            ("[tool.conformcheck]\njobs = 0\n", "jobs"),
            ("[tool.conformcheck]\ndisable = [1]\n", "disable"),
            ('[tool.conformcheck]\ncolour = "red"\n', "tool.conformcheck"),
            ('[tool.conformcheck.test-patterns]\njava = "("\n', "test-patterns"),
        ],
    )
    def test_invalid_values(self, tmp_path: Path, body: str, key: str) -> None:
        write_pyproject(tmp_path, body)
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(tmp_path, environ={})
        assert exc_info.value.key == key

    def test_invalid_toml(self, tmp_path: Path) -> None:
        write_pyproject(tmp_path, "[tool.conformcheck\n")
        with pytest.raises(ConfigurationError, match="invalid TOML"):
            load_config(tmp_path, environ={})

    def test_invalid_env_severity(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(tmp_path, environ={SEVERITY_ENV: "fatal"})
        assert exc_info.value.key == SEVERITY_ENV

    def test_invalid_format_flag(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(tmp_path, output_format="xml", environ={})
        assert exc_info.value.key == "--format"
