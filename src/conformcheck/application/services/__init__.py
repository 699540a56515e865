"""Application services: scanning, evaluation, checking."""

from conformcheck.application.services.checker import ConformanceChecker
from conformcheck.application.services.evaluator import RuleEvaluator, evaluate
from conformcheck.application.services.scanner import SourceScanner

__all__ = ["ConformanceChecker", "RuleEvaluator", "SourceScanner", "evaluate"]
