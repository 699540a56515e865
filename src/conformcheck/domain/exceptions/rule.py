"""Rule evaluation exceptions."""

from conformcheck.domain.exceptions.base import ConformCheckError


class RulePredicateFault(ConformCheckError):
    """Rule predicate raised while checking one declaration.

    Never escapes the evaluator: it is recorded as a synthetic
    violation and evaluation continues.

    Attributes:
        rule_id: Rule whose predicate failed
        subject: Qualified name of the declaration being checked
        cause: Original exception
    """

    def __init__(self, rule_id: str, subject: str, cause: Exception) -> None:
        # FAIL-FIRST validation
        if not rule_id:
            raise ValueError("rule_id must not be empty")
        if not subject:
            raise ValueError("subject must not be empty")
        if cause is None:
            raise TypeError("cause must not be None")

        self.rule_id = rule_id
        self.subject = subject
        self.cause = cause
        super().__init__(
            f"Rule '{rule_id}' failed on {subject}: {type(cause).__name__}: {cause}"
        )
