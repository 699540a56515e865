"""Tests for domain/exceptions."""

from pathlib import Path

import pytest

from conformcheck.domain.exceptions import (
    ConfigurationError,
    ConformCheckError,
    DuplicateRuleError,
    MalformedSourceError,
    RulePredicateFault,
    SourceError,
    UnreadableSourceError,
)


class TestHierarchy:
    """All domain errors share one root."""

    @pytest.mark.parametrize(
        "error_cls",
        [
            ConfigurationError,
            DuplicateRuleError,
            MalformedSourceError,
            RulePredicateFault,
            SourceError,
            UnreadableSourceError,
        ],
    )
    def test_is_conformcheck_error(self, error_cls: type[Exception]) -> None:
        assert issubclass(error_cls, ConformCheckError)

    def test_source_errors_share_base(self) -> None:
        assert issubclass(UnreadableSourceError, SourceError)
        assert issubclass(MalformedSourceError, SourceError)


class TestDuplicateRuleError:
    """Tests for DuplicateRuleError."""

    def test_has_rule_id(self) -> None:
        err = DuplicateRuleError("no-broad-catch")
        assert err.rule_id == "no-broad-catch"

    def test_message_format(self) -> None:
        assert str(DuplicateRuleError("x")) == "Rule 'x' is already registered"

    def test_empty_rule_id_raises(self) -> None:
        with pytest.raises(ValueError, match="rule_id"):
            DuplicateRuleError("")


class TestSourceErrors:
    """Tests for UnreadableSourceError and MalformedSourceError."""

    def test_unreadable_attributes(self) -> None:
        err = UnreadableSourceError(Path("A.java"), "permission denied")
        assert err.path == Path("A.java")
        assert err.reason == "permission denied"
        assert err.kind == "unreadable"
        assert str(err) == "Cannot read A.java: permission denied"

    def test_malformed_includes_line(self) -> None:
        err = MalformedSourceError(Path("A.java"), "unterminated string literal", line=7)
        assert err.kind == "malformed"
        assert err.line == 7
        assert err.reason == "unterminated string literal (line 7)"

    def test_malformed_without_line(self) -> None:
        err = MalformedSourceError(Path("A.java"), "broken")
        assert err.line is None
        assert err.reason == "broken"

    def test_none_path_raises(self) -> None:
        with pytest.raises(TypeError, match="path"):
            UnreadableSourceError(None, "reason")  # type: ignore[arg-type]

    def test_empty_reason_raises(self) -> None:
        with pytest.raises(ValueError, match="reason"):
            UnreadableSourceError(Path("A.java"), "")

    def test_non_positive_line_raises(self) -> None:
        with pytest.raises(ValueError, match="line"):
            MalformedSourceError(Path("A.java"), "broken", line=0)


class TestRulePredicateFault:
    """Tests for RulePredicateFault."""

    def test_wraps_cause(self) -> None:
        cause = KeyError("boom")
        fault = RulePredicateFault("doc-rule", "A.run", cause)
        assert fault.cause is cause
        assert fault.rule_id == "doc-rule"
        assert fault.subject == "A.run"
        assert str(fault) == "Rule 'doc-rule' failed on A.run: KeyError: 'boom'"

    def test_empty_subject_raises(self) -> None:
        with pytest.raises(ValueError, match="subject"):
            RulePredicateFault("rule", "", ValueError())


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_message_format(self) -> None:
        err = ConfigurationError("severity", "unknown severity 'loud'")
        assert err.key == "severity"
        assert str(err) == "Invalid configuration 'severity': unknown severity 'loud'"

    def test_can_catch_as_root(self) -> None:
        with pytest.raises(ConformCheckError) as exc_info:
            raise ConfigurationError("jobs", "must be positive")
        assert isinstance(exc_info.value, ConfigurationError)
