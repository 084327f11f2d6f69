class DamageReportError(Exception):
    """Base class for errors raised by the report server."""


class ValidationError(DamageReportError):
    """A request is missing a required field.

    The message is returned to the caller verbatim with a 400 status.
    """


class StorageError(DamageReportError):
    """The report store could not create, read or write a table."""
