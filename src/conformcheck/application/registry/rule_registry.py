"""Rule registry: catalog of checkable policies.

Built once at startup. Registration order is the evaluation and
report order of rules.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from conformcheck.domain.exceptions.registry import DuplicateRuleError

if TYPE_CHECKING:
    from conformcheck.domain.model.rule import Rule


class RuleRegistry:
    """Ordered, duplicate-free collection of rules."""

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        """Initialize registry, registering rules in order.

        Raises:
            DuplicateRuleError: If rules repeat an identifier
        """
        self._rules: dict[str, Rule] = {}
        for rule in rules:
            self.register(rule)

    def register(self, rule: Rule) -> None:
        """Add rule after all previously registered rules.

        Raises:
            DuplicateRuleError: If rule.rule_id is already registered.
                The registry is left unchanged.
        """
        if rule.rule_id in self._rules:
            raise DuplicateRuleError(rule.rule_id)
        self._rules[rule.rule_id] = rule

    def all(self) -> Iterable[Rule]:
        """Registered rules in registration order.

        Lazy and restartable: every iteration starts from the first rule
        and reflects the registry at that moment.
        """
        return _RuleView(self)

    def get(self, rule_id: str) -> Rule:
        """Rule by identifier.

        Raises:
            KeyError: If no rule has that identifier
        """
        return self._rules[rule_id]

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def _iter_rules(self) -> Iterator[Rule]:
        yield from tuple(self._rules.values())


class _RuleView:
    """Restartable iterable over a registry."""

    __slots__ = ("_registry",)

    def __init__(self, registry: RuleRegistry) -> None:
        self._registry = registry

    def __iter__(self) -> Iterator[Rule]:
        return self._registry._iter_rules()  # noqa: SLF001

    def __len__(self) -> int:
        return len(self._registry)
