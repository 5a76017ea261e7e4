"""Command-line tokenizer for testwave options.

Turns a raw argument vector into an ordered list of ParsedOption objects,
one per option occurrence or positional argument.

Supported syntax:
    --name, --name=value, --name value
    -x, -xVALUE, -x VALUE, -xyz (grouped flags)
    --         (everything after it is positional)
    @path      (via at_option_parser, same as --config-file=path)
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from ..errors import (
    AmbiguousOptionError,
    InvalidOptionSyntaxError,
    MissingOptionValueError,
    UnknownOptionError,
)
from .schema import OptionsDescription, OptionSpec

ExtraParser = Callable[[str], Optional[tuple[str, Optional[str]]]]


@dataclass
class ParsedOption:
    """One option occurrence, or a positional argument when key is None."""
    key: Optional[str]
    values: list[str] = field(default_factory=list)
    original_tokens: list[str] = field(default_factory=list)
    position: int = 0


@dataclass
class ParsedOptions:
    """Result of parsing one source against a description."""
    description: OptionsDescription
    options: list[ParsedOption] = field(default_factory=list)

    def __iter__(self):
        return iter(self.options)

    def arguments(self) -> list[ParsedOption]:
        """Positional arguments in source order."""
        return [opt for opt in self.options if is_argument(opt)]


def is_argument(option: ParsedOption) -> bool:
    """Whether a parsed entry is a positional argument rather than an option."""
    return option.key is None


def at_option_parser(token: str) -> Optional[tuple[str, Optional[str]]]:
    """Recognise '@path' as a config-file option."""
    if token.startswith("@") and len(token) > 1:
        return "config-file", token[1:]
    return None


def parse_command_line(
    argv: list[str],
    description: OptionsDescription,
    extra_parser: Optional[ExtraParser] = None,
    positional_name: Optional[str] = None,
) -> ParsedOptions:
    """Parse argv against description.

    Args:
        argv: Raw arguments, program name excluded.
        description: Options that are allowed in this source.
        extra_parser: Called with every token first; may claim it by
            returning (option_name, value).
        positional_name: When set, positional tokens are recorded as
            occurrences of this option instead of as arguments.

    Returns:
        ParsedOptions in token order.

    Raises:
        OptionError: On unknown, ambiguous or malformed options.
    """
    result = ParsedOptions(description=description)
    only_positional = False
    i = 0

    while i < len(argv):
        token = argv[i]
        position = i
        i += 1

        if not only_positional and extra_parser is not None:
            claimed = extra_parser(token)
            if claimed is not None:
                name, value = claimed
                spec = description.find(name)
                if spec is None:
                    raise UnknownOptionError(token)
                values = [value] if value is not None else []
                result.options.append(ParsedOption(spec.name, values, [token], position))
                continue

        if only_positional or token == "-" or not token.startswith("-"):
            result.options.append(_positional(token, position, positional_name))
            continue

        if token == "--":
            only_positional = True
            continue

        if token.startswith("--"):
            option, i = _parse_long(argv, i, token, position, description)
            result.options.append(option)
        else:
            options, i = _parse_short(argv, i, token, position, description)
            result.options.extend(options)

    return result


def _positional(token: str, position: int, positional_name: Optional[str]) -> ParsedOption:
    if positional_name is not None:
        return ParsedOption(positional_name, [token], [token], position)
    return ParsedOption(None, [token], [token], position)


def _resolve_long(name: str, token: str, description: OptionsDescription) -> OptionSpec:
    if not name:
        raise InvalidOptionSyntaxError(f"the syntax of option '{token}' is invalid")
    matches = description.find_prefix(name)
    if not matches:
        raise UnknownOptionError(token)
    if len(matches) > 1:
        raise AmbiguousOptionError(token, [spec.name for spec in matches])
    return matches[0]


def _parse_long(
    argv: list[str],
    i: int,
    token: str,
    position: int,
    description: OptionsDescription,
) -> tuple[ParsedOption, int]:
    name, sep, value = token[2:].partition("=")
    spec = _resolve_long(name, token, description)
    tokens = [token]

    if not spec.takes_value:
        if sep:
            raise InvalidOptionSyntaxError(
                f"option '--{spec.name}' does not take any arguments"
            )
        return ParsedOption(spec.name, [], tokens, position), i

    if not sep:
        if i >= len(argv):
            raise MissingOptionValueError(spec.name)
        value = argv[i]
        tokens.append(value)
        i += 1

    return ParsedOption(spec.name, [value], tokens, position), i


def _parse_short(
    argv: list[str],
    i: int,
    token: str,
    position: int,
    description: OptionsDescription,
) -> tuple[list[ParsedOption], int]:
    options = []
    chars = token[1:]

    for offset, char in enumerate(chars):
        spec = description.find_short(char)
        if spec is None:
            raise UnknownOptionError(f"-{char}")

        if not spec.takes_value:
            options.append(ParsedOption(spec.name, [], [token], position))
            continue

        # A value-taking short option consumes the rest of the token.
        value = chars[offset + 1:]
        tokens = [token]
        if not value:
            if i >= len(argv):
                raise MissingOptionValueError(spec.name)
            value = argv[i]
            tokens.append(value)
            i += 1
        options.append(ParsedOption(spec.name, [value], tokens, position))
        break

    return options, i
