"""Shared fixtures for reporter tests."""

from pathlib import Path

import pytest

from conformcheck.domain.model.check_result import CheckResult, ScanFailure
from conformcheck.domain.model.enums import Severity
from conformcheck.domain.model.violation import Violation
from tests.factories import make_declaration

ROOT = Path("/project")


@pytest.fixture
def result() -> CheckResult:
    """One error, one warning and one skipped file under /project."""
    error = Violation(
        rule_id="no-broad-catch",
        declaration=make_declaration("run", line=10),
        file=ROOT / "src" / "A.java",
        message="'A.run' catches the broad exception type",
        severity=Severity.ERROR,
    )
    warning = Violation(
        rule_id="public-class-documented",
        declaration=make_declaration("B", line=3),
        file=ROOT / "src" / "B.java",
        message="public class 'B' has no documentation",
        severity=Severity.WARNING,
    )
    failure = ScanFailure(
        path=ROOT / "src" / "C.java",
        kind="malformed",
        reason="unterminated string literal (line 4)",
    )
    return CheckResult(
        root=ROOT,
        violations=(error, warning),
        failures=(failure,),
        units_scanned=2,
        rules_run=8,
    )
