"""Executor module - the test-executor interface and reference implementation."""

from .app import DEFAULT_DEBUG_LEVEL, ExecutionConfig, TestwaveApp
from .case import Expectation, TestCase, ValidationError, ValidationResult
from .expectations import ExpectationEngine, ExpectationReport, ExpectationResult
from .loader import load_test_case, parse_test_case_data
from .process import ProcessOutcome, run_test_case
from .protocol import TestExecutor
from .reporter import JsonReporter
from .validator import validate_test_case

__all__ = [
    "DEFAULT_DEBUG_LEVEL",
    "ExecutionConfig",
    "Expectation",
    "ExpectationEngine",
    "ExpectationReport",
    "ExpectationResult",
    "JsonReporter",
    "ProcessOutcome",
    "TestCase",
    "TestExecutor",
    "TestwaveApp",
    "ValidationError",
    "ValidationResult",
    "load_test_case",
    "parse_test_case_data",
    "run_test_case",
    "validate_test_case",
]
