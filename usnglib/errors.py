class UsngError(ValueError):
    """Base class for conversion errors raised by usnglib."""


class MalformedInput(UsngError):
    """Text could not be tokenized, holds an invalid letter, or is ambiguous."""


class OutOfProjectionDomain(UsngError):
    """A point or projected coordinate lies outside the projection's envelope."""
