"""Reference test executor for testwave.

Every input file is a YAML test case naming a command and what it must
produce. The flow for one file:
1. Load the test case
2. Validate it
3. Run its command
4. Evaluate expectations
5. Print results according to the debug level
6. Save a JSON report if a report directory is configured

Debug levels:
    0  prints nothing except serious failures
    1  prints a short summary only (printed by the runner)
    2  prints the names of the failed tests
    3  prints the outcome of every test
    4  prints the expected and real result for failed tests
    5  prints the real result for succeeded tests as well
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click

from .. import __version__
from ..errors import TestCaseError
from ..options import OptionSpec, OptionsDescription, VariablesMap
from .case import TestCase
from .expectations import ExpectationEngine, ExpectationReport
from .loader import load_test_case
from .process import ProcessOutcome, run_test_case
from .reporter import JsonReporter
from .validator import validate_test_case

DEFAULT_DEBUG_LEVEL = 1

COPYRIGHT = """testwave: command-line test runner
Copyright (c) the testwave authors.
Distributed under the MIT License."""


@dataclass
class ExecutionConfig:
    """Configuration for test execution."""
    default_timeout: float = 60.0
    report_dir: Optional[Path] = None


class TestwaveApp:
    """Runs YAML test cases and reports their outcome.

    Option values are read from the shared variables map when a test runs,
    so options stored after construction (e.g. from config files) apply.
    """

    __test__ = False

    def __init__(
        self,
        variables: VariablesMap,
        config: Optional[ExecutionConfig] = None,
        debuglevel: int = DEFAULT_DEBUG_LEVEL,
    ):
        """Initialize the test application.

        Args:
            variables: Options shared with the command runner.
            config: Defaults used when no option overrides them.
            debuglevel: Initial debug level.
        """
        self.variables = variables
        self.config = config or ExecutionConfig()
        self.debuglevel = debuglevel
        self._engine = ExpectationEngine()
        self._reporter = JsonReporter()
        self._report_names: dict[str, str] = {}

    def common_options(self) -> OptionsDescription:
        return OptionsDescription("Options controlling the test execution", [
            OptionSpec(
                "timeout",
                f"per-test timeout in seconds (default: {self.config.default_timeout:g})",
                value_type=float,
            ),
            OptionSpec(
                "report-dir",
                "save a JSON report for every test into this directory",
                value_type=str,
            ),
        ])

    def set_debuglevel(self, level: int) -> None:
        self.debuglevel = level

    def get_debuglevel(self) -> int:
        return self.debuglevel

    def print_version(self) -> int:
        click.echo(f"testwave: version {__version__}")
        return 0

    def print_copyright(self) -> int:
        click.echo(COPYRIGHT)
        return 0

    def execution_config(self) -> ExecutionConfig:
        """Current settings, with options from the variables map applied."""
        report_dir = self.variables.get("report-dir")
        return ExecutionConfig(
            default_timeout=self.variables.get("timeout", self.config.default_timeout),
            report_dir=Path(report_dir) if report_dir else self.config.report_dir,
        )

    def test_a_file(self, path: str) -> bool:
        """Run one test-case file.

        Returns:
            True if the test case ran and all its expectations held.
        """
        config = self.execution_config()

        try:
            case = load_test_case(path)
        except TestCaseError as e:
            self._print_error(path, str(e))
            return False

        validation = validate_test_case(case)
        if not validation.valid:
            errors_str = "; ".join(f"{e.path}: {e.message}" for e in validation.errors)
            error = f"Invalid test case: {errors_str}"
            self._print_error(path, error)
            self._save_report(case, ExpectationReport(), None, error, config)
            return False

        outcome = run_test_case(case, config.default_timeout)
        report = self._engine.evaluate(case.expect, outcome)
        passed = report.all_passed

        self._print_outcome(path, case, report, outcome, passed)
        self._save_report(case, report, outcome, None, config)
        return passed

    def _print_error(self, path: str, message: str) -> None:
        if self.debuglevel >= 2:
            click.echo(f"testwave: {path}: failed")
            click.echo(f"  {message}")

    def _print_outcome(
        self,
        path: str,
        case: TestCase,
        report: ExpectationReport,
        outcome: ProcessOutcome,
        passed: bool,
    ) -> None:
        if passed:
            if self.debuglevel >= 3:
                click.echo(f"testwave: {path}: succeeded ({case.name})")
            if self.debuglevel >= 5:
                self._print_real_result(outcome)
            return

        if self.debuglevel >= 2:
            click.echo(f"testwave: {path}: failed ({case.name})")
        if self.debuglevel >= 4:
            for r in report.failures:
                click.echo(f"  [FAIL] {r.name}: {r.details}")
                if r.expected is not None:
                    click.echo(f"    expected: {r.expected!r}")
                if r.actual is not None:
                    click.echo(f"    real:     {r.actual!r}")

    def _print_real_result(self, outcome: ProcessOutcome) -> None:
        click.echo(f"  returncode: {outcome.returncode}")
        if outcome.stdout:
            click.echo("  stdout:")
            click.echo(outcome.stdout.rstrip("\n"))
        if outcome.stderr:
            click.echo("  stderr:")
            click.echo(outcome.stderr.rstrip("\n"))

    def _report_name(self, case: TestCase) -> str:
        """Report file stem, unique per test file within this run.

        The first file named case.yaml reports to case.json, the next one
        from another directory to case-2.json, and so on.
        """
        source = str(Path(case.source).resolve())
        name = self._report_names.get(source)
        if name is not None:
            return name

        stem = Path(case.source).stem
        taken = set(self._report_names.values())
        name, counter = stem, 1
        while name in taken:
            counter += 1
            name = f"{stem}-{counter}"
        self._report_names[source] = name
        return name

    def _save_report(
        self,
        case: TestCase,
        report: ExpectationReport,
        outcome: Optional[ProcessOutcome],
        error: Optional[str],
        config: ExecutionConfig,
    ) -> Optional[str]:
        """Save test report to file."""
        if config.report_dir is None:
            return None

        try:
            report_path = config.report_dir / f"{self._report_name(case)}.json"
            data = self._reporter.generate(case, report, outcome=outcome, error=error)
            saved_path = self._reporter.save(data, report_path)
            if self.debuglevel >= 3:
                click.echo(f"  Report saved: {saved_path}")
            return str(saved_path)

        except OSError as e:
            click.echo(f"testwave: warning: failed to save report: {e}", err=True)
            return None
