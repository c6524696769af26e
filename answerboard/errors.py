"""
Domain errors raised by the answerboard services.

Routers never build HTTP errors for these directly; the handlers in
answerboard.exception_handlers translate them into status codes.
"""


class QAError(Exception):
    """Base class for answerboard errors."""

    status_code = 500


class NotFoundError(QAError):
    """A referenced question, answer, user or category does not exist."""

    status_code = 404


class DuplicateError(QAError):
    """The submitted record already exists. Nothing was written."""

    status_code = 409


class ValidationError(QAError):
    """The request is well-formed but not acceptable (full slot, bad vote, bad sort key)."""

    status_code = 400


class StorageError(QAError):
    """The underlying store failed. Any in-flight unit of work was rolled back."""

    status_code = 500


class WriteConflictError(StorageError):
    """An integrity constraint rejected a write (unique key, concurrent insert)."""
