"""Configuration exceptions."""

from conformcheck.domain.exceptions.base import ConformCheckError


class ConfigurationError(ConformCheckError):
    """Invalid configuration value.

    Attributes:
        key: Configuration key (must not be empty)
        reason: Why the value is invalid (must not be empty)
    """

    def __init__(self, key: str, reason: str) -> None:
        # FAIL-FIRST validation
        if not key:
            raise ValueError("key must not be empty")
        if not reason:
            raise ValueError("reason must not be empty")

        self.key = key
        self.reason = reason
        super().__init__(f"Invalid configuration '{key}': {reason}")
