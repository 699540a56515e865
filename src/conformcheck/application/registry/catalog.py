"""Shipped rule catalog.

Only structurally detectable policies live here. Predicates are pure
functions of (declaration, unit) and yield one message per violation.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING

from conformcheck.application.registry.rule_registry import RuleRegistry
from conformcheck.domain.model.configuration import DEFAULT_TEST_PATTERNS, CheckConfig
from conformcheck.domain.model.enums import DeclarationKind, Feature, Severity
from conformcheck.domain.model.rule import Rule

if TYPE_CHECKING:
    from conformcheck.domain.model.declaration import Declaration
    from conformcheck.domain.model.source_unit import SourceUnit


def public_method_documented(declaration: Declaration, unit: SourceUnit) -> Iterator[str]:
    """Public callables carry documentation; overrides inherit theirs."""
    if (
        declaration.kind.is_callable
        and declaration.is_public
        and not declaration.documented
        and not declaration.has(Feature.OVERRIDE)
        and not declaration.has(Feature.TEST)
    ):
        yield f"public {declaration.kind.name.lower()} '{declaration.qualified_name}' has no documentation"


def public_class_documented(declaration: Declaration, unit: SourceUnit) -> Iterator[str]:
    if declaration.kind == DeclarationKind.CLASS and declaration.is_public and not declaration.documented:
        yield f"public class '{declaration.qualified_name}' has no documentation"


def no_broad_catch(declaration: Declaration, unit: SourceUnit) -> Iterator[str]:
    if declaration.has(Feature.CATCHES_BROAD):
        yield f"'{declaration.qualified_name}' catches the broad exception type; catch specific subtypes"


def no_swallowed_exception(declaration: Declaration, unit: SourceUnit) -> Iterator[str]:
    if declaration.has(Feature.SWALLOWS_EXCEPTION):
        yield f"'{declaration.qualified_name}' has an empty catch block that swallows the exception"


def no_broad_throw(declaration: Declaration, unit: SourceUnit) -> Iterator[str]:
    if declaration.has(Feature.THROWS_BROAD):
        yield f"'{declaration.qualified_name}' throws the broad exception type; throw a specific subtype"


def scoped_resource(declaration: Declaration, unit: SourceUnit) -> Iterator[str]:
    """Acquired resources are released on every exit path.

    Each acquisition is classified on its own: a returned resource is
    owned by the caller and never hides a leak elsewhere in the body.
    """
    if declaration.has(Feature.UNSCOPED_RESOURCE):
        yield (
            f"'{declaration.qualified_name}' acquires a resource outside a scoped block; "
            "release is not guaranteed on all exit paths"
        )


def no_public_mutable_field(declaration: Declaration, unit: SourceUnit) -> Iterator[str]:
    if (
        declaration.kind == DeclarationKind.FIELD
        and declaration.is_public
        and declaration.has(Feature.MUTABLE)
    ):
        yield f"public field '{declaration.qualified_name}' is mutable and leaks internal state"


class NamingPatternCheck:
    """Test names match a per-language pattern.

    Languages without a configured pattern are not checked.
    """

    __slots__ = ("_patterns",)

    def __init__(self, patterns: Mapping[str, str]) -> None:
        self._patterns = {language: re.compile(p) for language, p in patterns.items()}

    def __call__(self, declaration: Declaration, unit: SourceUnit) -> Iterator[str]:
        if not declaration.has(Feature.TEST):
            return
        pattern = self._patterns.get(unit.language)
        if pattern is not None and not pattern.match(declaration.name):
            yield f"test '{declaration.qualified_name}' does not match pattern {pattern.pattern}"


def catalog(test_patterns: Mapping[str, str] = DEFAULT_TEST_PATTERNS) -> tuple[Rule, ...]:
    """Shipped rules in registration order."""
    return (
        Rule(
            rule_id="public-method-documented",
            description="Public methods and functions must have documentation",
            severity=Severity.ERROR,
            predicate=public_method_documented,
        ),
        Rule(
            rule_id="public-class-documented",
            description="Public classes must have documentation",
            severity=Severity.WARNING,
            predicate=public_class_documented,
        ),
        Rule(
            rule_id="no-broad-catch",
            description="Catch blocks must not catch the most general exception type",
            severity=Severity.ERROR,
            predicate=no_broad_catch,
        ),
        Rule(
            rule_id="no-swallowed-exception",
            description="Catch blocks must not be empty",
            severity=Severity.ERROR,
            predicate=no_swallowed_exception,
        ),
        Rule(
            rule_id="no-broad-throw",
            description="Code must not throw the most general exception type",
            severity=Severity.WARNING,
            predicate=no_broad_throw,
        ),
        Rule(
            rule_id="scoped-resource",
            description="Resources must be acquired in a scope that guarantees release",
            severity=Severity.ERROR,
            predicate=scoped_resource,
        ),
        Rule(
            rule_id="test-name-pattern",
            description="Test names must match the configured naming pattern",
            severity=Severity.WARNING,
            predicate=NamingPatternCheck(test_patterns),
        ),
        Rule(
            rule_id="no-public-mutable-field",
            description="Fields must not be both public and mutable",
            severity=Severity.ERROR,
            predicate=no_public_mutable_field,
        ),
    )


def default_registry(config: CheckConfig | None = None) -> RuleRegistry:
    """Registry of shipped rules minus those disabled in config.

    Raises:
        DuplicateRuleError: If the catalog repeats an identifier
    """
    config = config or CheckConfig()
    return RuleRegistry(
        rule
        for rule in catalog(config.test_patterns)
        if rule.rule_id not in config.disabled_rules
    )
