"""Domain ports (interfaces implemented by outer layers)."""

from conformcheck.domain.ports.reporter import ReporterProtocol
from conformcheck.domain.ports.scanner import LanguageScannerProtocol

__all__ = ["LanguageScannerProtocol", "ReporterProtocol"]
