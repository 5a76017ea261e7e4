"""Command runner - turns an argument vector into test runs.

Coordinates one invocation:
1. Parse command-line options (with @file shorthand for config files)
2. Merge config files into the same option set
3. Handle help, debug, version and copyright options
4. Test every input file through the executor
5. Print a summary and return the number of failed tests
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

import click

from ..executor.protocol import TestExecutor
from ..options import (
    OptionSpec,
    OptionsDescription,
    VariablesMap,
    at_option_parser,
    combine,
    parse_command_line,
    read_config_file,
    store,
)

MAX_EXIT_CODE = 2**31 - 1
RECOGNIZED_FAILURE_EXIT = MAX_EXIT_CODE - 1
UNKNOWN_FAILURE_EXIT = MAX_EXIT_CODE - 2

MIN_DEBUG_LEVEL = 0
MAX_DEBUG_LEVEL = 9


@dataclass
class RunResult:
    """Counters of a completed run."""
    input_count: int = 0
    error_count: int = 0
    early_exit: Optional[int] = None  # set when help/version/copyright ended the run

    @property
    def succeeded(self) -> int:
        return self.input_count - self.error_count

    @property
    def exit_code(self) -> int:
        if self.early_exit is not None:
            return self.early_exit
        return self.error_count

    def record(self, passed: bool) -> None:
        if not passed:
            self.error_count += 1
        self.input_count += 1


@dataclass
class RecognizedFailure:
    """The run was aborted by an exception with a usable message."""
    message: str

    @property
    def exit_code(self) -> int:
        return RECOGNIZED_FAILURE_EXIT


@dataclass
class UnknownFailure:
    """The run was aborted by something that is not an Exception."""
    description: str = ""

    @property
    def exit_code(self) -> int:
        return UNKNOWN_FAILURE_EXIT


RunOutcome = Union[RunResult, RecognizedFailure, UnknownFailure]


def visible_options() -> OptionsDescription:
    """Options shown in the usage text and allowed everywhere."""
    return OptionsDescription("Options allowed on the command line", [
        OptionSpec("help", "print out program usage (this message)", short="h"),
        OptionSpec("version", "print the version number", short="v"),
        OptionSpec("copyright", "print out the copyright statement", short="c"),
        OptionSpec(
            "config-file",
            "specify a config file (alternatively: @arg)",
            value_type=str,
            composing=True,
        ),
        OptionSpec(
            "debug",
            f"set the debug level ({MIN_DEBUG_LEVEL}...{MAX_DEBUG_LEVEL})",
            short="d",
            value_type=int,
        ),
    ])


def hidden_options() -> OptionsDescription:
    """Options only config files use: bare lines there become 'input'."""
    return OptionsDescription("Hidden options", [
        OptionSpec("input", "inputfile", value_type=str, composing=True),
    ])


class CommandRunner:
    """Runs the testwave command line against a test executor."""

    def __init__(
        self,
        executor: TestExecutor,
        variables: Optional[VariablesMap] = None,
        prog: str = "testwave",
    ):
        """Initialize command runner.

        Args:
            executor: Executor that tests individual input files.
            variables: Option map shared with the executor. A new one is
                created when not given. It is cleared at the start
                of every run.
            prog: Program name used in messages.
        """
        self.executor = executor
        self.variables = variables if variables is not None else VariablesMap()
        self.prog = prog

    def run(self, args: Sequence[str]) -> int:
        """Run and return the process exit code."""
        return self.run_detailed(args).exit_code

    def run_detailed(self, args: Sequence[str]) -> RunOutcome:
        """Run and return the counters, or the failure that aborted the run.

        Never raises, except for SystemExit.
        """
        try:
            return self._run(list(args))

        except SystemExit:
            raise

        except Exception as e:
            message = str(e) or type(e).__name__
            self._error(f"exception caught: {message}")
            return RecognizedFailure(message)

        except BaseException as e:
            self._error("unexpected exception caught.")
            return UnknownFailure(type(e).__name__)

    def _run(self, args: list[str]) -> RunResult:
        # Each run starts from its own arguments only.
        self.variables.clear()
        result = RunResult()
        visible = visible_options()
        executor_options = self.executor.common_options()

        cmdline_options = combine("", visible, executor_options)
        cfgfile_options = combine("", visible, hidden_options(), executor_options)

        parsed = parse_command_line(args, cmdline_options, extra_parser=at_option_parser)
        store(parsed, self.variables)

        # Only config files named on the command line are read.
        for cfg_file in list(self.variables.get("config-file", [])):
            read_config_file(cfg_file, cfgfile_options, self.variables)

        if "help" in self.variables:
            self._print_help(visible, executor_options)
            result.early_exit = 0
            return result

        if "debug" in self.variables:
            self._apply_debuglevel(self.variables["debug"])

        if "version" in self.variables:
            result.early_exit = self.executor.print_version()
            return result

        if "copyright" in self.variables:
            result.early_exit = self.executor.print_copyright()
            return result

        inputs = list(self.variables.get("input", []))
        inputs.extend(opt.values[0] for opt in parsed.arguments())

        for path in inputs:
            result.record(self.executor.test_a_file(path))

        self._print_summary(result)
        return result

    def _apply_debuglevel(self, level: int) -> None:
        if level < MIN_DEBUG_LEVEL or level > MAX_DEBUG_LEVEL:
            self._error(
                f"please use an integer in the range [{MIN_DEBUG_LEVEL}..{MAX_DEBUG_LEVEL}] "
                "as the parameter to the debug option!"
            )
            return
        self.executor.set_debuglevel(level)

    def _print_help(
        self,
        visible: OptionsDescription,
        executor_options: OptionsDescription,
    ) -> None:
        click.echo(f"Usage: {self.prog} [options] [@config-file(s)] file(s)")
        for desc in (visible, executor_options):
            if len(desc):
                click.echo("")
                click.echo(desc.format_help())

    def _print_summary(self, result: RunResult) -> None:
        if result.input_count == 0:
            self._error("no input file specified, try --help to get a hint.")
            return

        if self.executor.get_debuglevel() > 0:
            summary = (
                f"{self.prog}: {result.succeeded} of {result.input_count} test(s) succeeded"
            )
            if result.error_count != 0:
                summary += f" ({result.error_count} test(s) failed)"
            click.echo(summary + ".")

    def _error(self, message: str) -> None:
        click.echo(f"{self.prog}: {message}", err=True)
