"""Checker service: Discover -> Scan -> Evaluate.

Files are scanned in parallel; per-file source errors are recorded
and skipped. On interruption pending scans are cancelled and no
partial result is returned.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from conformcheck.application.discovery.files import discover_sources
from conformcheck.application.services.evaluator import RuleEvaluator
from conformcheck.domain.exceptions.source import SourceError
from conformcheck.domain.model.check_result import CheckResult, ScanFailure
from conformcheck.domain.model.source_unit import SourceUnit

if TYPE_CHECKING:
    from pathlib import Path

    from conformcheck.application.registry.rule_registry import RuleRegistry
    from conformcheck.application.services.scanner import SourceScanner

logger = logging.getLogger(__name__)


class ConformanceChecker:
    """Runs the whole pipeline for one root path."""

    def __init__(
        self,
        registry: RuleRegistry,
        scanner: SourceScanner,
        *,
        jobs: int | None = None,
    ) -> None:
        """Initialize checker.

        Args:
            registry: Rules to apply
            scanner: Suffix-dispatching scanner
            jobs: Worker threads for scan and evaluate. None = default
        """
        self._registry = registry
        self._scanner = scanner
        self._jobs = jobs
        self._evaluator = RuleEvaluator(jobs=jobs)

    def check(self, root: Path) -> CheckResult:
        """Check every source file under root.

        Args:
            root: Directory or single file

        Returns:
            CheckResult; root is the directory paths are reported against

        Raises:
            KeyboardInterrupt: If interrupted (no partial result)
        """
        base = root if root.is_dir() else root.parent

        try:
            paths = discover_sources(root, self._scanner.suffixes)
        except SourceError as e:
            logger.warning("%s", e)
            return CheckResult(
                root=base,
                violations=(),
                failures=(ScanFailure(path=root, kind=e.kind, reason=e.reason),),
                units_scanned=0,
                rules_run=len(self._registry),
            )

        logger.debug("discovered %d source files under %s", len(paths), root)
        units, failures = self._scan_all(paths)
        violations = self._evaluator.evaluate(units, self._registry)

        return CheckResult(
            root=base,
            violations=violations,
            failures=failures,
            units_scanned=len(units),
            rules_run=len(self._registry),
        )

    def _scan_all(self, paths: tuple[Path, ...]) -> tuple[tuple[SourceUnit, ...], tuple[ScanFailure, ...]]:
        with ThreadPoolExecutor(max_workers=self._jobs) as pool:
            try:
                outcomes = list(pool.map(self._scan_one, paths))
            except KeyboardInterrupt:
                logger.warning("interrupted: cancelling %d pending scans", len(paths))
                pool.shutdown(wait=False, cancel_futures=True)
                raise

        units = tuple(o for o in outcomes if isinstance(o, SourceUnit))
        failures = tuple(o for o in outcomes if isinstance(o, ScanFailure))
        return units, failures

    def _scan_one(self, path: Path) -> SourceUnit | ScanFailure:
        try:
            return self._scanner.scan(path)
        except SourceError as e:
            logger.warning("skipping %s", e)
            return ScanFailure(path=path, kind=e.kind, reason=e.reason)
