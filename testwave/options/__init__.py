"""Options module - command-line and config-file option handling."""

from .config_file import read_config_file
from .parser import (
    ParsedOption,
    ParsedOptions,
    at_option_parser,
    is_argument,
    parse_command_line,
)
from .schema import OptionSpec, OptionsDescription, combine
from .variables import VariablesMap, VariableValue, store

__all__ = [
    "OptionSpec",
    "OptionsDescription",
    "ParsedOption",
    "ParsedOptions",
    "VariableValue",
    "VariablesMap",
    "at_option_parser",
    "combine",
    "is_argument",
    "parse_command_line",
    "read_config_file",
    "store",
]
