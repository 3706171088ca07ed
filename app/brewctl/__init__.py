"""brewctl - cancelable Homebrew operations from the command line."""

__version__ = "0.1.0"
