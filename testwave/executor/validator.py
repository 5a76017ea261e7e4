"""Test case validator.

Validates loaded TestCase objects before their command is run.
"""

from pathlib import Path

from .case import TestCase, ValidationError, ValidationResult


def validate_test_case(case: TestCase) -> ValidationResult:
    """Validate a loaded TestCase object.

    Checks:
    - Command is a non-empty list of strings
    - Timeout and working directory
    - Expectation field types

    Args:
        case: Loaded TestCase to validate.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    _validate_command(case, errors)
    _validate_run_settings(case, errors)
    _validate_expectation(case, errors, warnings)

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_command(case: TestCase, errors: list[ValidationError]) -> None:
    if not case.command:
        errors.append(ValidationError(
            path="command",
            message="'command' is required and must not be empty.",
        ))
        return

    for i, part in enumerate(case.command):
        if not isinstance(part, (str, int, float)) or isinstance(part, bool):
            errors.append(ValidationError(
                path=f"command[{i}]",
                message=f"Command arguments must be strings, got {type(part).__name__}.",
            ))


def _validate_run_settings(case: TestCase, errors: list[ValidationError]) -> None:
    if case.timeout is not None:
        if isinstance(case.timeout, bool) or not isinstance(case.timeout, (int, float)):
            errors.append(ValidationError(
                path="timeout",
                message=f"Timeout must be a number, got {case.timeout!r}.",
            ))
        elif case.timeout <= 0:
            errors.append(ValidationError(
                path="timeout",
                message=f"Timeout must be positive, got {case.timeout}.",
            ))

    if case.stdin is not None and not isinstance(case.stdin, str):
        errors.append(ValidationError(
            path="stdin",
            message="'stdin' must be a string.",
        ))

    if case.cwd is not None:
        if not isinstance(case.cwd, str):
            errors.append(ValidationError(
                path="cwd",
                message="'cwd' must be a string.",
            ))
        elif not (Path(case.source).parent / case.cwd).is_dir():
            errors.append(ValidationError(
                path="cwd",
                message=f"Working directory '{case.cwd}' does not exist.",
            ))


def _validate_expectation(
    case: TestCase,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    expect = case.expect

    if expect.returncode is not None and (
        isinstance(expect.returncode, bool) or not isinstance(expect.returncode, int)
    ):
        errors.append(ValidationError(
            path="expect.returncode",
            message=f"'returncode' must be an integer, got {expect.returncode!r}.",
        ))

    for name in ("stdout", "stderr"):
        value = getattr(expect, name)
        if value is not None and not isinstance(value, str):
            errors.append(ValidationError(
                path=f"expect.{name}",
                message=f"'{name}' must be a string.",
            ))

    for name in ("stdout_contains", "stderr_contains"):
        for i, item in enumerate(getattr(expect, name)):
            if not isinstance(item, str):
                errors.append(ValidationError(
                    path=f"expect.{name}[{i}]",
                    message=f"'{name}' entries must be strings, got {type(item).__name__}.",
                ))

    if (
        expect.returncode is None
        and expect.stdout is None
        and expect.stderr is None
        and not expect.stdout_contains
        and not expect.stderr_contains
    ):
        warnings.append(ValidationError(
            path="expect",
            message="No expectations defined. Test will pass whenever the command runs.",
            severity="warning",
        ))
