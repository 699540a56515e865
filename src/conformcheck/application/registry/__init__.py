"""Rule registry and shipped catalog."""

from conformcheck.application.registry.catalog import catalog, default_registry
from conformcheck.application.registry.rule_registry import RuleRegistry

__all__ = ["RuleRegistry", "catalog", "default_registry"]
