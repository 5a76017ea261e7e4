"""JSON report generator for test-case results.

Generates structured JSON reports from test-case execution results.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .case import TestCase
from .expectations import ExpectationReport
from .process import ProcessOutcome


class JsonReporter:
    """Generates JSON reports from test-case results."""

    def generate(
        self,
        case: TestCase,
        expectation_report: ExpectationReport,
        outcome: Optional[ProcessOutcome] = None,
        error: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate a JSON report from test results.

        Args:
            case: The test case that was run.
            expectation_report: Results of expectation evaluation.
            outcome: What the command produced (None if it never ran).
            error: Overall error message if the test could not run.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        passed = error is None and expectation_report.all_passed

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "test": case.name,
            "source": case.source,
            "status": "passed" if passed else "failed",
            "summary": {
                "total": expectation_report.total_count,
                "passed": expectation_report.passed_count,
                "failed": expectation_report.failed_count,
                "duration_ms": outcome.duration_ms if outcome else 0,
            },
            "command": [str(part) for part in case.command],
            "returncode": outcome.returncode if outcome else None,
            "expectations": [
                {
                    "name": r.name,
                    "status": "pass" if r.passed else "fail",
                    "details": r.details,
                }
                for r in expectation_report.results
            ],
            "error": error,
        }

    def save(self, report: dict[str, Any], path: Path) -> Path:
        """Save report to a JSON file.

        Args:
            report: Report dictionary.
            path: Output file path.

        Returns:
            Path to the saved file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        return path

