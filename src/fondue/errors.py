"""Errors raised by fondue."""


class FondueError(Exception):
    """Base class for all fondue errors."""
    pass


class ConfigurationError(FondueError):
    """
    Raised for coding defects such as a malformed literal URL.

    These are not runtime conditions and are not meant to be caught.
    """
    pass


class ProcessorTimeout(FondueError, TimeoutError):
    """Raised when a processor attempt produces no result in time."""

    def __init__(self, seconds: float):
        super().__init__(f"No result within {seconds}s")
        self.seconds = seconds


class ProcessorError(FondueError):
    """Wraps whatever a caller-supplied processor raised."""

    def __init__(self, error: BaseException):
        super().__init__(f"Processor failed: {error!r}")
        self.error = error
        self.__cause__ = error
