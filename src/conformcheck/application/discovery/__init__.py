"""Discovery of source files to scan."""

from conformcheck.application.discovery.files import DEFAULT_EXCLUDES, discover_sources

__all__ = ["DEFAULT_EXCLUDES", "discover_sources"]
