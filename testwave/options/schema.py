"""Option schema for the testwave command line and config files.

Defines the declared options, grouped into captioned descriptions that can
be combined and rendered as usage text.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from ..errors import InvalidOptionValueError

# Column where help text starts in rendered usage output.
HELP_COLUMN = 24


@dataclass(frozen=True)
class OptionSpec:
    """A single declared option."""
    name: str
    help: str = ""
    short: Optional[str] = None
    value_type: Optional[type] = None  # None = flag without a value
    composing: bool = False
    value_name: str = "arg"

    def __post_init__(self):
        if self.short is not None and len(self.short) != 1:
            raise ValueError(f"Short name must be a single character, got '{self.short}'")

    @property
    def takes_value(self) -> bool:
        return self.value_type is not None

    def convert(self, raw: str):
        """Convert a raw string value to the declared type."""
        if self.value_type is None or self.value_type is str:
            return raw
        try:
            return self.value_type(raw)
        except (TypeError, ValueError):
            raise InvalidOptionValueError(self.name, raw) from None

    def format_names(self) -> str:
        """Render the option names the way usage text shows them."""
        if self.short:
            names = f"-{self.short} [ --{self.name} ]"
        else:
            names = f"--{self.name}"
        if self.takes_value:
            names += f" {self.value_name}"
        return names


class OptionsDescription:
    """An ordered, captioned group of options."""

    def __init__(self, caption: str = "", options: Optional[list[OptionSpec]] = None):
        self.caption = caption
        self._options: list[OptionSpec] = []
        for spec in options or []:
            self.add_option(spec)

    def __iter__(self) -> Iterator[OptionSpec]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def add_option(self, spec: OptionSpec) -> "OptionsDescription":
        if spec.name in self:
            raise ValueError(f"Option '--{spec.name}' is declared twice")
        if spec.short and self.find_short(spec.short):
            raise ValueError(f"Short option '-{spec.short}' is declared twice")
        self._options.append(spec)
        return self

    def add(self, other: "OptionsDescription") -> "OptionsDescription":
        """Merge another description into this one, keeping order."""
        for spec in other:
            self.add_option(spec)
        return self

    def find(self, name: str) -> Optional[OptionSpec]:
        for spec in self._options:
            if spec.name == name:
                return spec
        return None

    def find_short(self, short: str) -> Optional[OptionSpec]:
        for spec in self._options:
            if spec.short == short:
                return spec
        return None

    def find_prefix(self, prefix: str) -> list[OptionSpec]:
        """Options whose long name starts with prefix (exact match wins)."""
        exact = self.find(prefix)
        if exact is not None:
            return [exact]
        return [spec for spec in self._options if spec.name.startswith(prefix)]

    def format_help(self) -> str:
        """Render usage text: a caption line followed by one line per option."""
        lines = []
        if self.caption:
            lines.append(f"{self.caption}:")
        for spec in self._options:
            names = f"  {spec.format_names()}"
            if len(names) >= HELP_COLUMN - 1:
                lines.append(names)
                lines.append(" " * HELP_COLUMN + spec.help)
            else:
                lines.append(names.ljust(HELP_COLUMN) + spec.help)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format_help()


def combine(caption: str, *descriptions: OptionsDescription) -> OptionsDescription:
    """Build a new description holding the options of all given ones."""
    combined = OptionsDescription(caption)
    for desc in descriptions:
        combined.add(desc)
    return combined
