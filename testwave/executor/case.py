"""Test case data models.

Defines dataclasses for parsing and representing YAML test-case files.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

VALID_EXPECT_KEYS = {
    "returncode",
    "stdout",
    "stderr",
    "stdout_contains",
    "stderr_contains",
}


@dataclass
class Expectation:
    """What the command of a test case must produce."""
    returncode: Optional[int] = 0
    stdout: Optional[str] = None
    stderr: Optional[str] = None
    stdout_contains: list[str] = field(default_factory=list)
    stderr_contains: list[str] = field(default_factory=list)


@dataclass
class TestCase:
    """A single test case loaded from a file."""
    name: str
    command: list[str]
    source: str = "<inline>"
    description: str = ""
    stdin: Optional[str] = None
    cwd: Optional[str] = None
    env: dict[str, str] = field(default_factory=dict)
    timeout: Optional[float] = None
    expect: Expectation = field(default_factory=Expectation)

    __test__ = False

    def to_dict(self) -> dict[str, Any]:
        """Convert test case to dictionary for serialization."""
        return {
            "name": self.name,
            "source": self.source,
            "description": self.description,
            "command": list(self.command),
            "cwd": self.cwd,
            "timeout": self.timeout,
            "expect": {
                k: v for k, v in self.expect.__dict__.items()
                if v is not None and v != []
            },
        }


@dataclass
class ValidationError:
    """A single validation error."""
    path: str
    message: str
    severity: str = "error"  # "error" or "warning"


@dataclass
class ValidationResult:
    """Result of test case validation."""
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def __str__(self) -> str:
        if self.valid:
            msg = "Valid"
            if self.warnings:
                msg += f" ({self.warning_count} warnings)"
            return msg
        return f"Invalid: {self.error_count} errors, {self.warning_count} warnings"
