"""Domain model: declarations, rules, violations, results."""

from conformcheck.domain.model.check_result import CheckResult, ScanFailure
from conformcheck.domain.model.configuration import CheckConfig
from conformcheck.domain.model.declaration import Declaration
from conformcheck.domain.model.enums import DeclarationKind, Feature, Severity, Visibility
from conformcheck.domain.model.location import Location
from conformcheck.domain.model.rule import Rule
from conformcheck.domain.model.source_unit import SourceUnit
from conformcheck.domain.model.taxonomy import Taxonomy
from conformcheck.domain.model.violation import Violation

__all__ = [
    "CheckConfig",
    "CheckResult",
    "Declaration",
    "DeclarationKind",
    "Feature",
    "Location",
    "Rule",
    "ScanFailure",
    "Severity",
    "SourceUnit",
    "Taxonomy",
    "Violation",
    "Visibility",
]
