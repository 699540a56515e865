"""Base exceptions for conformcheck domain."""


class ConformCheckError(Exception):
    """Root exception for all conformcheck errors.

    All domain exceptions inherit from this.
    Allows catching all conformcheck-specific errors.
    """
