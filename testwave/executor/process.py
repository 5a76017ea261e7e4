"""Run the command of a test case and capture what it produced."""

import os
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .case import TestCase


@dataclass
class ProcessOutcome:
    """What a test command produced."""
    returncode: Optional[int] = None
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0
    error: Optional[str] = None  # set when the command did not complete

    @property
    def completed(self) -> bool:
        return self.error is None


def run_test_case(case: TestCase, timeout: float) -> ProcessOutcome:
    """Run the command of a test case.

    The command runs in the test file's directory (or its 'cwd' relative to
    it) with the case's 'env' merged over the current environment.

    Args:
        case: Validated test case.
        timeout: Seconds to wait when the case sets no timeout of its own.

    Returns:
        ProcessOutcome; failures to start or finish are reported in
        outcome.error instead of being raised.
    """
    base_dir = Path(case.source).parent
    cwd = base_dir / case.cwd if case.cwd else base_dir
    env = {**os.environ, **case.env}
    effective_timeout = case.timeout if case.timeout is not None else timeout

    outcome = ProcessOutcome()
    start_time = time.time()

    try:
        completed = subprocess.run(
            [str(part) for part in case.command],
            input=case.stdin,
            capture_output=True,
            text=True,
            cwd=str(cwd),
            env=env,
            timeout=effective_timeout,
        )
        outcome.returncode = completed.returncode
        outcome.stdout = completed.stdout
        outcome.stderr = completed.stderr

    except subprocess.TimeoutExpired as e:
        outcome.error = f"Timeout: command did not finish within {effective_timeout}s"
        outcome.stdout = _decode(e.stdout)
        outcome.stderr = _decode(e.stderr)

    except (FileNotFoundError, PermissionError) as e:
        outcome.error = f"Cannot start command '{case.command[0]}': {e.strerror or e}"

    except OSError as e:
        outcome.error = f"Command failed to run: {e}"

    except ValueError as e:
        # e.g. an embedded NUL byte in an argument or environment value
        outcome.error = f"Command cannot be run: {e}"

    finally:
        outcome.duration_ms = int((time.time() - start_time) * 1000)

    return outcome


def _decode(data) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
