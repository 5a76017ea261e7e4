"""Shared fixtures for testwave tests."""

import sys
from pathlib import Path

import pytest
import yaml

from testwave.options import OptionSpec, OptionsDescription, VariablesMap


class FakeExecutor:
    """Executor double that records calls and returns canned results."""

    def __init__(self, results=None, debuglevel=1, raise_on=None):
        self.results = results or {}
        self.debuglevel = debuglevel
        self.raise_on = raise_on or {}
        self.tested: list[str] = []
        self.version_calls = 0
        self.copyright_calls = 0

    def common_options(self) -> OptionsDescription:
        return OptionsDescription("Fake executor options", [
            OptionSpec("fake-flag", "a flag contributed by the executor"),
            OptionSpec("fake-value", "a value contributed by the executor", value_type=str),
        ])

    def set_debuglevel(self, level: int) -> None:
        self.debuglevel = level

    def get_debuglevel(self) -> int:
        return self.debuglevel

    def test_a_file(self, path: str) -> bool:
        self.tested.append(path)
        if path in self.raise_on:
            raise self.raise_on[path]
        return self.results.get(path, True)

    def print_version(self) -> int:
        self.version_calls += 1
        return 3

    def print_copyright(self) -> int:
        self.copyright_calls += 1
        return 4


@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def variables():
    return VariablesMap()


@pytest.fixture
def write_case(tmp_path: Path):
    """Write a YAML test case into tmp_path and return its path."""

    def _write(name: str, data: dict) -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def python_command():
    """Command prefix running a Python snippet with the current interpreter."""

    def _command(code: str) -> list[str]:
        return [sys.executable, "-c", code]

    return _command


@pytest.fixture
def make_executor():
    return FakeExecutor
