"""Expectation engine for evaluating test outcomes.

Compares what a test command produced against the test case's expectations.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .case import Expectation
from .process import ProcessOutcome


@dataclass
class ExpectationResult:
    """Result of a single expectation check."""
    name: str
    passed: bool
    details: str
    expected: Optional[Any] = None
    actual: Optional[Any] = None


@dataclass
class ExpectationReport:
    """Report of all expectation checks of one test case."""
    results: list[ExpectationResult] = field(default_factory=list)

    @property
    def all_passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    @property
    def total_count(self) -> int:
        return len(self.results)

    @property
    def failures(self) -> list[ExpectationResult]:
        return [r for r in self.results if not r.passed]


class ExpectationEngine:
    """Evaluates the expectations of a test case against its outcome."""

    def evaluate(self, expect: Expectation, outcome: ProcessOutcome) -> ExpectationReport:
        """Evaluate all expectations.

        Args:
            expect: Expectations from the test case.
            outcome: What the command produced.

        Returns:
            ExpectationReport with individual results. A command that did not
            complete yields a single failed 'completed' result.
        """
        report = ExpectationReport()

        if not outcome.completed:
            report.results.append(ExpectationResult(
                name="completed",
                passed=False,
                details=outcome.error,
            ))
            return report

        if expect.returncode is not None:
            report.results.append(self._compare(
                "returncode", expect.returncode, outcome.returncode
            ))

        if expect.stdout is not None:
            report.results.append(self._compare("stdout", expect.stdout, outcome.stdout))

        if expect.stderr is not None:
            report.results.append(self._compare("stderr", expect.stderr, outcome.stderr))

        for needle in expect.stdout_contains:
            report.results.append(self._contains("stdout", needle, outcome.stdout))

        for needle in expect.stderr_contains:
            report.results.append(self._contains("stderr", needle, outcome.stderr))

        return report

    def _compare(self, name: str, expected: Any, actual: Any) -> ExpectationResult:
        passed = expected == actual
        details = "matches" if passed else f"expected {expected!r}, got {actual!r}"
        return ExpectationResult(
            name=name,
            passed=passed,
            details=details,
            expected=expected,
            actual=actual,
        )

    def _contains(self, stream: str, needle: str, text: str) -> ExpectationResult:
        passed = needle in text
        details = "found" if passed else f"{needle!r} not found"
        return ExpectationResult(
            name=f"{stream}_contains",
            passed=passed,
            details=details,
            expected=needle,
            actual=text,
        )
