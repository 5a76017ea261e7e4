"""YAML test-case loader.

Parses YAML test-case files into TestCase dataclass objects.
"""

import shlex
from pathlib import Path
from typing import Union

import yaml

from ..errors import TestCaseError
from .case import VALID_EXPECT_KEYS, Expectation, TestCase


def load_test_case(file_path: Union[str, Path]) -> TestCase:
    """Load a YAML test-case file into a TestCase object.

    Args:
        file_path: Path to the test-case file.

    Returns:
        Parsed TestCase object.

    Raises:
        TestCaseError: If the file is missing, the YAML is malformed or
            required fields are missing.
    """
    file_path = Path(file_path)

    if not file_path.is_file():
        raise TestCaseError(f"Test file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise TestCaseError(f"Invalid YAML in {file_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise TestCaseError(f"Cannot read {file_path}: {e}") from e

    if data is None:
        raise TestCaseError(f"Empty test file: {file_path}")

    return parse_test_case_data(data, source=str(file_path), default_name=file_path.stem)


def parse_test_case_data(
    data: dict,
    source: str = "<inline>",
    default_name: str = "unnamed",
) -> TestCase:
    """Parse a test case from a dictionary (already loaded YAML).

    Args:
        data: Dictionary with test-case data.
        source: Source identifier for error messages.
        default_name: Name used when the data has none.

    Returns:
        Parsed TestCase object.

    Raises:
        TestCaseError: If required fields are missing or malformed.
    """
    if not isinstance(data, dict):
        raise TestCaseError(f"Test case must be a YAML mapping, got {type(data).__name__} ({source})")

    if "command" not in data:
        raise TestCaseError(f"Missing required field 'command' in {source}")

    command = data["command"]
    if isinstance(command, str):
        try:
            command = shlex.split(command)
        except ValueError as e:
            raise TestCaseError(f"Cannot split 'command' in {source}: {e}") from e
    elif isinstance(command, list):
        command = list(command)
    else:
        raise TestCaseError(f"'command' must be a string or a list in {source}")

    env = data.get("env") or {}
    if not isinstance(env, dict):
        raise TestCaseError(f"'env' must be a mapping in {source}")

    return TestCase(
        name=str(data.get("name") or default_name),
        command=command,
        source=source,
        description=str(data.get("description") or ""),
        stdin=data.get("stdin"),
        cwd=data.get("cwd"),
        env={str(k): str(v) for k, v in env.items()},
        timeout=data.get("timeout"),
        expect=_parse_expectation(data.get("expect"), source),
    )


def _parse_expectation(data, source: str) -> Expectation:
    if data is None:
        return Expectation()
    if not isinstance(data, dict):
        raise TestCaseError(f"'expect' must be a mapping in {source}")

    unknown = sorted(set(data) - VALID_EXPECT_KEYS)
    if unknown:
        raise TestCaseError(
            f"Unknown 'expect' field(s) {', '.join(unknown)} in {source}. "
            f"Must be one of: {', '.join(sorted(VALID_EXPECT_KEYS))}"
        )

    # Only the listed checks apply once an expect block is given.
    fields = dict(data)
    fields.setdefault("returncode", None)
    for key in ("stdout_contains", "stderr_contains"):
        value = fields.get(key)
        if value is None:
            fields[key] = []
        elif not isinstance(value, list):
            fields[key] = [value]

    return Expectation(**fields)
