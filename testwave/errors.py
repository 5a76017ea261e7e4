"""Exception hierarchy for testwave."""


class TestwaveError(Exception):
    """Base class for all errors raised by testwave."""

    # Keep pytest from collecting this class and its subclasses.
    __test__ = False


class OptionError(TestwaveError):
    """Invalid option usage on the command line or in a config file."""


class UnknownOptionError(OptionError):
    def __init__(self, token: str):
        super().__init__(f"unrecognised option '{token}'")
        self.token = token


class AmbiguousOptionError(OptionError):
    def __init__(self, token: str, candidates: list[str]):
        names = ", ".join(f"--{c}" for c in candidates)
        super().__init__(f"option '{token}' is ambiguous and matches {names}")
        self.token = token
        self.candidates = candidates


class InvalidOptionSyntaxError(OptionError):
    """An option token is malformed, e.g. a value given to a flag."""


class MissingOptionValueError(OptionError):
    def __init__(self, name: str):
        super().__init__(f"the required argument for option '--{name}' is missing")
        self.name = name


class InvalidOptionValueError(OptionError):
    def __init__(self, name: str, value: str):
        super().__init__(f"the argument ('{value}') for option '--{name}' is invalid")
        self.name = name
        self.value = value


class MultipleOccurrencesError(OptionError):
    def __init__(self, name: str):
        super().__init__(f"option '--{name}' cannot be specified more than once")
        self.name = name


class ConfigFileError(TestwaveError):
    """A config file could not be read or parsed."""


class TestCaseError(TestwaveError):
    """A test-case file could not be loaded.

    Raised inside the reference executor and turned into a failed test,
    never into an aborted run.
    """