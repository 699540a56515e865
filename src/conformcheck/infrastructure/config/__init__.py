"""Configuration loading."""

from conformcheck.infrastructure.config.loader import SEVERITY_ENV, find_pyproject, load_config

__all__ = ["SEVERITY_ENV", "find_pyproject", "load_config"]
