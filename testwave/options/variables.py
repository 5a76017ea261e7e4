"""Merged option values collected from every source of a run."""

from dataclasses import dataclass
from typing import Any, Iterator

from ..errors import MultipleOccurrencesError
from .parser import ParsedOptions, is_argument


@dataclass
class VariableValue:
    """Stored value of one option and the source that first set it."""
    value: Any
    source: str


class VariablesMap:
    """Option name -> value, merged across command line and config files.

    Composing options hold a list that grows with every occurrence from any
    source. Any other option keeps the value of the first source that set it.
    """

    def __init__(self):
        self._values: dict[str, VariableValue] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __getitem__(self, name: str) -> Any:
        return self._values[name].value

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def get(self, name: str, default: Any = None) -> Any:
        entry = self._values.get(name)
        return entry.value if entry is not None else default

    def source_of(self, name: str) -> str:
        return self._values[name].source

    def clear(self) -> None:
        """Forget every stored value."""
        self._values.clear()

    def set_default(self, name: str, value: Any, source: str = "default") -> None:
        """Set a value only if no source has set it yet."""
        if name not in self._values:
            self._values[name] = VariableValue(value, source)

    def append(self, name: str, values: list, source: str) -> None:
        """Extend a composing option with values."""
        entry = self._values.get(name)
        if entry is None:
            self._values[name] = VariableValue(list(values), source)
        else:
            entry.value.extend(values)


def store(parsed: ParsedOptions, variables: VariablesMap, source: str = "command line") -> None:
    """Store parsed options into variables.

    Positional arguments are not stored; callers pick them up from parsed.

    Raises:
        MultipleOccurrencesError: If a non-composing option occurs twice in
            this source.
        InvalidOptionValueError: If a value does not convert to its type.
    """
    seen: set[str] = set()

    for option in parsed:
        if is_argument(option):
            continue

        spec = parsed.description.find(option.key)
        if spec.composing:
            values = [spec.convert(raw) for raw in option.values]
            variables.append(spec.name, values, source)
            continue

        if spec.name in seen:
            raise MultipleOccurrencesError(spec.name)
        seen.add(spec.name)

        value = spec.convert(option.values[0]) if spec.takes_value else True
        variables.set_default(spec.name, value, source)
