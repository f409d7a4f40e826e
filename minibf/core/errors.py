class MiniBfError(Exception):
    """Base class for failures that end a minibf command."""


class ProgramLoadError(MiniBfError):
    """Raised when program text cannot be read from disk."""


class CompilerError(MiniBfError):
    """Raised when the external C compiler is missing or fails."""


class ConfigError(MiniBfError, ValueError):
    """Raised for malformed runtime configuration."""


class SessionInterrupted(MiniBfError):
    """Raised from the interrupt handler to unwind a blocking read."""


class OutputWriteError(MiniBfError):
    """Raised when a generated file cannot be written."""
