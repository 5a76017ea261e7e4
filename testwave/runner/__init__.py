"""Runner module - command-line orchestration."""

from .command_runner import (
    MAX_DEBUG_LEVEL,
    MIN_DEBUG_LEVEL,
    RECOGNIZED_FAILURE_EXIT,
    UNKNOWN_FAILURE_EXIT,
    CommandRunner,
    RecognizedFailure,
    RunOutcome,
    RunResult,
    UnknownFailure,
    hidden_options,
    visible_options,
)

__all__ = [
    "MAX_DEBUG_LEVEL",
    "MIN_DEBUG_LEVEL",
    "RECOGNIZED_FAILURE_EXIT",
    "UNKNOWN_FAILURE_EXIT",
    "CommandRunner",
    "RecognizedFailure",
    "RunOutcome",
    "RunResult",
    "UnknownFailure",
    "hidden_options",
    "visible_options",
]
