"""Domain exceptions."""

from conformcheck.domain.exceptions.base import ConformCheckError
from conformcheck.domain.exceptions.configuration import ConfigurationError
from conformcheck.domain.exceptions.registry import DuplicateRuleError
from conformcheck.domain.exceptions.rule import RulePredicateFault
from conformcheck.domain.exceptions.source import (
    MalformedSourceError,
    SourceError,
    UnreadableSourceError,
)

__all__ = [
    "ConformCheckError",
    "ConfigurationError",
    "DuplicateRuleError",
    "RulePredicateFault",
    "SourceError",
    "UnreadableSourceError",
    "MalformedSourceError",
]
