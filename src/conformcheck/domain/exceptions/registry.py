"""Rule registry exceptions."""

from conformcheck.domain.exceptions.base import ConformCheckError


class DuplicateRuleError(ConformCheckError):
    """Rule with the same identifier is already registered.

    Fatal: indicates a misconfigured catalog, not a property of
    the scanned codebase.

    Attributes:
        rule_id: Identifier registered twice
    """

    def __init__(self, rule_id: str) -> None:
        # FAIL-FIRST validation
        if not rule_id:
            raise ValueError("rule_id must not be empty")

        self.rule_id = rule_id
        super().__init__(f"Rule '{rule_id}' is already registered")
