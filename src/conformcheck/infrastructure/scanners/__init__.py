"""Language adapters mapping source constructs to declaration facts."""

from conformcheck.infrastructure.scanners.base import read_source
from conformcheck.infrastructure.scanners.java_scanner import JavaScanner
from conformcheck.infrastructure.scanners.python_scanner import PythonScanner

__all__ = ["JavaScanner", "PythonScanner", "read_source"]
