"""
Error types raised by the content store and the upload handler.

Each error carries the HTTP status the API answers with.
"""


class PortfolioError(Exception):
    """Base exception for portfolio errors."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(PortfolioError):
    """Missing or malformed required fields; nothing was persisted."""

    status_code = 400


class NotFound(PortfolioError):
    """The target row of an update or delete does not exist."""

    status_code = 404


class StorageUnavailable(PortfolioError):
    """The database is unreachable or a statement failed."""

    status_code = 503


class UploadRejected(PortfolioError):
    """Uploaded file has a disallowed type or exceeds the size limit."""

    status_code = 400
