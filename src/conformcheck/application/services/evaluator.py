"""Rule evaluator: apply every rule to every declaration.

Output order is fixed: unit path (lexicographic), declaration
position, rule registration order, then predicate emission order.
Parallel evaluation never leaks into that order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from conformcheck.domain.exceptions.rule import RulePredicateFault
from conformcheck.domain.model.enums import Severity
from conformcheck.domain.model.violation import Violation

if TYPE_CHECKING:
    from conformcheck.application.registry.rule_registry import RuleRegistry
    from conformcheck.domain.model.declaration import Declaration
    from conformcheck.domain.model.rule import Rule
    from conformcheck.domain.model.source_unit import SourceUnit

logger = logging.getLogger(__name__)

type _Keyed = tuple[tuple[str, int, int, int], Violation]


class RuleEvaluator:
    """Applies registry rules to scanned units.

    Stateless between evaluate() calls.
    """

    def __init__(self, jobs: int | None = None) -> None:
        """Initialize evaluator.

        Args:
            jobs: Worker threads. None = executor default, 1 = sequential
        """
        if jobs is not None and jobs < 1:
            raise ValueError(f"jobs must be >= 1, got {jobs}")
        self._jobs = jobs

    def evaluate(self, units: Iterable[SourceUnit], registry: RuleRegistry) -> tuple[Violation, ...]:
        """Evaluate all rules against all declarations.

        A predicate that raises is isolated: it yields one fault
        violation for that (rule, declaration) pair and evaluation
        continues.

        Args:
            units: Scanned source units
            registry: Rules to apply

        Returns:
            Violations in deterministic order
        """
        rules = tuple(registry.all())
        units = tuple(units)

        if self._jobs == 1 or len(units) <= 1:
            batches = [_evaluate_unit(unit, rules) for unit in units]
        else:
            with ThreadPoolExecutor(max_workers=self._jobs) as pool:
                batches = list(pool.map(_evaluate_unit, units, [rules] * len(units)))

        keyed = [item for batch in batches for item in batch]
        keyed.sort(key=lambda item: item[0])
        return tuple(violation for _, violation in keyed)


def evaluate(units: Iterable[SourceUnit], registry: RuleRegistry) -> tuple[Violation, ...]:
    """Sequential evaluation with a default evaluator."""
    return RuleEvaluator(jobs=1).evaluate(units, registry)


def _evaluate_unit(unit: SourceUnit, rules: tuple[Rule, ...]) -> list[_Keyed]:
    keyed: list[_Keyed] = []
    for declaration in unit:
        for rule_index, rule in enumerate(rules):
            violations = _apply(rule, declaration, unit)
            for sequence, violation in enumerate(violations):
                keyed.append(((unit.sort_key, declaration.position, rule_index, sequence), violation))
    return keyed


def _apply(rule: Rule, declaration: Declaration, unit: SourceUnit) -> tuple[Violation, ...]:
    try:
        messages = rule.check(declaration, unit)
    except Exception as exc:  # noqa: BLE001 - a broken rule must not abort the run
        fault = RulePredicateFault(rule.rule_id, declaration.qualified_name, exc)
        logger.warning("%s: %s", unit.path, fault)
        return (
            Violation(
                rule_id=rule.rule_id,
                declaration=declaration,
                file=unit.path,
                message=str(fault),
                severity=Severity.ERROR,
                fault=True,
            ),
        )

    return tuple(
        Violation(
            rule_id=rule.rule_id,
            declaration=declaration,
            file=unit.path,
            message=message,
            severity=rule.severity,
        )
        for message in messages
    )
