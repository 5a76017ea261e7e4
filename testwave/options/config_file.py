"""Config file reader.

A config file supplies the same options as the command line. Two formats
are understood:

Line-oriented (any suffix other than .yaml/.yml):
    # comment
    --debug=3
    -d 3
    timeout=10          (bare name=value for a declared option)
    tests/case_one.yaml (anything else is an input file)

YAML mapping:
    debug: 3
    input:
      - tests/case_one.yaml
      - tests/case_two.yaml
"""

import shlex
from pathlib import Path
from typing import Union

import yaml

from ..errors import ConfigFileError, OptionError
from .parser import ParsedOptions, parse_command_line
from .schema import OptionsDescription
from .variables import VariablesMap, store

INPUT_OPTION = "input"
YAML_SUFFIXES = (".yaml", ".yml")


def read_config_file(
    file_path: Union[str, Path],
    description: OptionsDescription,
    variables: VariablesMap,
) -> ParsedOptions:
    """Parse a config file and merge its options into variables.

    Args:
        file_path: Path to the config file.
        description: Options allowed in config files.
        variables: Map to merge the parsed values into.

    Returns:
        The parsed options of this file.

    Raises:
        ConfigFileError: If the file is missing, unreadable or malformed.
    """
    file_path = Path(file_path)

    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(f"cannot read config file '{file_path}': {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise ConfigFileError(f"config file '{file_path}' is not valid UTF-8") from e

    if file_path.suffix.lower() in YAML_SUFFIXES:
        tokens = _yaml_tokens(text, file_path)
    else:
        try:
            tokens = _line_tokens(text, description)
        except ValueError as e:
            raise ConfigFileError(f"{file_path}: {e}") from e

    positional_name = INPUT_OPTION if INPUT_OPTION in description else None
    try:
        parsed = parse_command_line(tokens, description, positional_name=positional_name)
        store(parsed, variables, source=str(file_path))
    except OptionError as e:
        raise ConfigFileError(f"{file_path}: {e}") from e

    return parsed


def _line_tokens(text: str, description: OptionsDescription) -> list[str]:
    """Turn config file lines into command-line tokens."""
    tokens = []

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith("-"):
            tokens.extend(shlex.split(line))
            continue

        name, sep, value = line.partition("=")
        name = name.strip()
        if sep and name in description:
            tokens.append(f"--{name}={value.strip()}")
        else:
            # Input paths may contain spaces, keep the whole line.
            tokens.append(line)

    return tokens


def _yaml_tokens(text: str, file_path: Path) -> list[str]:
    """Turn a YAML option mapping into command-line tokens."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigFileError(f"invalid YAML in config file '{file_path}': {e}") from e

    if data is None:
        return []
    if not isinstance(data, dict):
        raise ConfigFileError(
            f"config file '{file_path}' must be a YAML mapping, got {type(data).__name__}"
        )

    tokens = []
    for name, value in data.items():
        items = value if isinstance(value, list) else [value]
        for item in items:
            if item is None or item is False:
                continue
            if item is True:
                tokens.append(f"--{name}")
            else:
                tokens.append(f"--{name}={item}")
    return tokens
