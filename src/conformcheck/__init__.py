"""conformcheck - rule-conformance checker for code-of-conduct policies."""

__version__ = "0.1.0"

from conformcheck.application.registry import RuleRegistry, default_registry
from conformcheck.application.services import ConformanceChecker, RuleEvaluator, SourceScanner, evaluate
from conformcheck.domain.exceptions import (
    ConformCheckError,
    DuplicateRuleError,
    MalformedSourceError,
    RulePredicateFault,
    UnreadableSourceError,
)
from conformcheck.domain.model import Rule, Severity, SourceUnit, Violation

__all__ = [
    "ConformCheckError",
    "ConformanceChecker",
    "DuplicateRuleError",
    "MalformedSourceError",
    "Rule",
    "RuleEvaluator",
    "RuleRegistry",
    "RulePredicateFault",
    "Severity",
    "SourceScanner",
    "SourceUnit",
    "UnreadableSourceError",
    "Violation",
    "__version__",
    "default_registry",
    "evaluate",
]
