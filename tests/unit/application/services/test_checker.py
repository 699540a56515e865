"""Tests for application/services/checker.py."""

from pathlib import Path

import pytest

from conformcheck.application.registry.rule_registry import RuleRegistry
from conformcheck.application.services.checker import ConformanceChecker
from conformcheck.application.services.scanner import SourceScanner
from conformcheck.domain.model.check_result import EXIT_SOURCE_ERRORS
from conformcheck.domain.model.enums import Severity
from conformcheck.infrastructure.scanners import JavaScanner, PythonScanner
from tests.factories import make_rule


def flag_all_methods(declaration, unit):
    if declaration.kind.is_callable:
        yield f"{declaration.name} flagged"


@pytest.fixture
def checker() -> ConformanceChecker:
    registry = RuleRegistry([make_rule("flag", flag_all_methods)])
    return ConformanceChecker(registry, SourceScanner([JavaScanner()]), jobs=2)


class TestConformanceChecker:
    """Tests for the discover/scan/evaluate pipeline."""

    def test_checks_directory(self, tmp_path: Path, checker: ConformanceChecker) -> None:
        (tmp_path / "A.java").write_text("class A { void run() {} }\n")
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / "B.java").write_text("class B { void go() {} }\n")

        result = checker.check(tmp_path)

        assert result.root == tmp_path
        assert result.units_scanned == 2
        assert result.rules_run == 1
        assert [v.declaration.name for v in result.violations] == ["run", "go"]

    def test_single_file_root(self, tmp_path: Path, checker: ConformanceChecker) -> None:
        source = tmp_path / "A.java"
        source.write_text("class A { void run() {} }\n")

        result = checker.check(source)

        assert result.root == tmp_path
        assert len(result.violations) == 1

    def test_malformed_recorded_others_reported(self, tmp_path: Path, checker: ConformanceChecker) -> None:
        (tmp_path / "A.java").write_text("class A { void run() {} }\n")
        (tmp_path / "Broken.java").write_text('class Broken { String s = "open; }\n')

        result = checker.check(tmp_path)

        assert len(result.violations) == 1
        (failure,) = result.failures
        assert failure.path == tmp_path / "Broken.java"
        assert failure.kind == "malformed"
        assert result.exit_code(Severity.WARNING) == EXIT_SOURCE_ERRORS

    def test_undecodable_recorded(self, tmp_path: Path, checker: ConformanceChecker) -> None:
        (tmp_path / "Bad.java").write_bytes(b"\xff\xfe\xfa class")

        result = checker.check(tmp_path)

        (failure,) = result.failures
        assert failure.kind == "unreadable"

    def test_too_deep_files_do_not_stop_run(self, tmp_path: Path) -> None:
        registry = RuleRegistry([make_rule("flag", flag_all_methods)])
        checker = ConformanceChecker(registry, SourceScanner([JavaScanner(), PythonScanner()]), jobs=2)
        (tmp_path / "B.java").write_text("class B { void run() {} }\n")
        (tmp_path / "D.java").write_text("class A { " * 3000)
        (tmp_path / "deep.py").write_text("x = " + "-" * 200_000 + "1\n")
        (tmp_path / "ok.py").write_text("def go():\n    pass\n")

        result = checker.check(tmp_path)

        assert [v.declaration.name for v in result.violations] == ["run", "go"]
        assert [(f.path.name, f.kind) for f in result.failures] == [("D.java", "malformed")]
        assert result.units_scanned == 3

    def test_missing_root_recorded(self, tmp_path: Path, checker: ConformanceChecker) -> None:
        result = checker.check(tmp_path / "missing")

        assert result.units_scanned == 0
        assert result.failures[0].kind == "unreadable"
        assert result.exit_code(Severity.ERROR) == EXIT_SOURCE_ERRORS

    def test_interrupt_during_scan_propagates(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        registry = RuleRegistry([make_rule("flag", flag_all_methods)])
        scanner = SourceScanner([JavaScanner()])
        checker = ConformanceChecker(registry, scanner, jobs=1)
        for name in ("A", "B", "C"):
            (tmp_path / f"{name}.java").write_text(f"class {name} {{ }}\n")

        def interrupted(path: Path):
            raise KeyboardInterrupt

        monkeypatch.setattr(scanner, "scan", interrupted)

        with pytest.raises(KeyboardInterrupt):
            checker.check(tmp_path)
