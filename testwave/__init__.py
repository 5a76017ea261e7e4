"""testwave - command-line test runner."""

__version__ = "0.1.0"
