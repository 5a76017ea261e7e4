"""Interface between the command runner and a test executor."""

from typing import Protocol

from ..options import OptionsDescription


class TestExecutor(Protocol):
    """Anything that can test one input file at a time.

    The runner merges common_options() into its own option schema, forwards
    the debug level, and calls test_a_file() once per input.
    """

    def common_options(self) -> OptionsDescription:
        ...

    def set_debuglevel(self, level: int) -> None:
        ...

    def get_debuglevel(self) -> int:
        ...

    def test_a_file(self, path: str) -> bool:
        ...

    def print_version(self) -> int:
        ...

    def print_copyright(self) -> int:
        ...
