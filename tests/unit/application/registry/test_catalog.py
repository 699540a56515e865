"""Tests for application/registry/catalog.py."""

from pathlib import Path

import pytest

from conformcheck.application.registry.catalog import (
    NamingPatternCheck,
    catalog,
    default_registry,
    no_broad_catch,
    no_public_mutable_field,
    public_class_documented,
    public_method_documented,
    scoped_resource,
)
from conformcheck.domain.model.configuration import CheckConfig
from conformcheck.domain.model.enums import DeclarationKind, Feature, Visibility
from tests.factories import make_declaration, make_unit


def run(predicate, declaration, language: str = "java") -> list[str]:
    unit = make_unit(declaration, path=Path("A.java"), language=language)
    return list(predicate(unit.declarations[0], unit))


class TestCatalog:
    """Tests for the shipped rule set."""

    def test_ids_unique_and_ordered(self) -> None:
        ids = [r.rule_id for r in catalog()]
        assert len(ids) == len(set(ids))
        assert ids[0] == "public-method-documented"
        assert "no-broad-catch" in ids

    def test_default_registry_has_all(self) -> None:
        assert len(default_registry()) == len(catalog())

    def test_disabled_rules_left_out(self) -> None:
        registry = default_registry(CheckConfig(disabled_rules=frozenset({"no-broad-catch"})))
        assert "no-broad-catch" not in registry
        assert len(registry) == len(catalog()) - 1


class TestDocumentationRules:
    """Tests for documentation predicates."""

    def test_undocumented_public_method_flagged_once(self) -> None:
        messages = run(public_method_documented, make_declaration("run"))
        assert messages == ["public method 'A.run' has no documentation"]

    def test_documented_method_passes(self) -> None:
        assert run(public_method_documented, make_declaration(documented=True)) == []

    def test_private_method_passes(self) -> None:
        assert run(public_method_documented, make_declaration(visibility=Visibility.PRIVATE)) == []

    def test_override_exempt(self) -> None:
        declaration = make_declaration(features=[Feature.OVERRIDE])
        assert run(public_method_documented, declaration) == []

    def test_field_not_checked_as_method(self) -> None:
        assert run(public_method_documented, make_declaration(kind=DeclarationKind.FIELD)) == []

    def test_class_rule(self) -> None:
        declaration = make_declaration("A", kind=DeclarationKind.CLASS, qualified_name="A")
        assert run(public_class_documented, declaration) == ["public class 'A' has no documentation"]


class TestFeatureRules:
    """Tests for feature-driven predicates."""

    def test_broad_catch_flagged_once(self) -> None:
        declaration = make_declaration(features=[Feature.CATCHES_BROAD, Feature.SWALLOWS_EXCEPTION])
        assert len(run(no_broad_catch, declaration)) == 1

    def test_returned_resource_not_flagged(self) -> None:
        declaration = make_declaration(features=[Feature.RETURNS_RESOURCE])
        assert run(scoped_resource, declaration) == []

    def test_returned_resource_does_not_hide_leak(self) -> None:
        declaration = make_declaration(features=[Feature.UNSCOPED_RESOURCE, Feature.RETURNS_RESOURCE])
        assert len(run(scoped_resource, declaration)) == 1

    def test_unscoped_resource_flagged(self) -> None:
        declaration = make_declaration(features=[Feature.UNSCOPED_RESOURCE])
        assert len(run(scoped_resource, declaration)) == 1

    @pytest.mark.parametrize(
        ("visibility", "features", "expected"),
        [
            (Visibility.PUBLIC, [Feature.MUTABLE], 1),
            (Visibility.PUBLIC, [], 0),
            (Visibility.PRIVATE, [Feature.MUTABLE], 0),
        ],
    )
    def test_public_mutable_field(self, visibility: Visibility, features: list[Feature], expected: int) -> None:
        declaration = make_declaration("count", kind=DeclarationKind.FIELD, visibility=visibility, features=features)
        assert len(run(no_public_mutable_field, declaration)) == expected


class TestNamingPatternCheck:
    """Tests for NamingPatternCheck."""

    def test_matching_name_passes(self) -> None:
        check = NamingPatternCheck({"java": r"^should\w+$"})
        declaration = make_declaration("shouldWork", features=[Feature.TEST])
        assert run(check, declaration) == []

    def test_mismatch_flagged(self) -> None:
        check = NamingPatternCheck({"java": r"^should\w+$"})
        declaration = make_declaration("testWork", features=[Feature.TEST])
        assert run(check, declaration) == [r"test 'A.testWork' does not match pattern ^should\w+$"]

    def test_non_test_ignored(self) -> None:
        check = NamingPatternCheck({"java": r"^should\w+$"})
        assert run(check, make_declaration("testWork")) == []

    def test_language_without_pattern_ignored(self) -> None:
        check = NamingPatternCheck({"java": r"^should\w+$"})
        declaration = make_declaration("whatever", features=[Feature.TEST])
        assert run(check, declaration, language="python") == []
