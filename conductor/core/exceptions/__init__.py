"""Business Exceptions

Domain-specific exceptions.
"""


class ConductorException(Exception):
    """Base exception for the conductor monitor"""

    pass


class ValidationError(ConductorException, ValueError):
    """A threshold, interval or argument is out of range"""

    pass


class StoreError(ConductorException):
    """The backing Redis store rejected or failed a command"""

    pass


class StoreUnavailable(StoreError):
    """The backing Redis store could not be reached"""

    pass


class MalformedEvent(ConductorException):
    """An event log entry could not be deserialized"""

    pass
