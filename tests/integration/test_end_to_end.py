"""End-to-end checks over real source trees."""

from pathlib import Path

import pytest

from conformcheck.application.registry import RuleRegistry, catalog, default_registry
from conformcheck.application.services import ConformanceChecker, SourceScanner
from conformcheck.domain.model.check_result import EXIT_OK, EXIT_SOURCE_ERRORS, EXIT_VIOLATIONS
from conformcheck.domain.model.enums import Severity
from conformcheck.infrastructure.scanners import JavaScanner, PythonScanner

A_JAVA = """\
package demo;

public class A {
    public void run() {
    }
}
"""

B_JAVA = """\
package demo;

/** Fully documented. */
public class B {
    /** Runs. */
    public void run() {
    }
}
"""


def documentation_only() -> RuleRegistry:
    return RuleRegistry(r for r in catalog() if r.rule_id == "public-method-documented")


def make_checker(registry: RuleRegistry) -> ConformanceChecker:
    return ConformanceChecker(registry, SourceScanner([JavaScanner(), PythonScanner()]))


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "A.java").write_text(A_JAVA)
    (tmp_path / "B.java").write_text(B_JAVA)
    return tmp_path


class TestEndToEnd:
    """Discover, scan, evaluate and report on temporary trees."""

    def test_one_violation_for_a(self, project: Path) -> None:
        result = make_checker(documentation_only()).check(project)

        (violation,) = result.violations
        assert violation.file == project / "A.java"
        assert violation.declaration.qualified_name == "A.run"
        assert violation.line == 4
        assert result.exit_code(Severity.WARNING) == EXIT_VIOLATIONS

    def test_documented_tree_passes(self, project: Path) -> None:
        (project / "A.java").unlink()

        result = make_checker(documentation_only()).check(project)

        assert result.violations == ()
        assert result.exit_code(Severity.WARNING) == EXIT_OK

    def test_malformed_file_recorded(self, project: Path) -> None:
        (project / "C.java").write_text('class C { String s = "unterminated; }\n')

        result = make_checker(documentation_only()).check(project)

        assert len(result.violations) == 1
        assert [f.path.name for f in result.failures] == ["C.java"]
        assert result.exit_code(Severity.WARNING) == EXIT_SOURCE_ERRORS

    def test_mixed_languages_full_catalog(self, project: Path) -> None:
        (project / "util.py").write_text(
            '"""Utilities."""\n\n\ndef load(path):\n    try:\n        return open(path).read()\n'
            "    except Exception:\n        pass\n"
        )

        result = make_checker(default_registry()).check(project)

        python = [(v.rule_id, v.declaration.name) for v in result.violations if v.file.suffix == ".py"]
        assert python == [
            ("public-method-documented", "load"),
            ("no-broad-catch", "load"),
            ("no-swallowed-exception", "load"),
            ("scoped-resource", "load"),
        ]
        assert result.units_scanned == 3

    def test_repeated_runs_identical(self, project: Path) -> None:
        checker = make_checker(default_registry())
        assert checker.check(project).violations == checker.check(project).violations
