"""
Error types raised by the service and persistence layers.
"""


class ServiceError(Exception):
    """Base class for errors surfaced to the HTTP layer."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """Lookup by id or name matched no row."""

    status_code = 404


class PersistenceError(ServiceError):
    """Connectivity failure or constraint violation in the database."""

    status_code = 500
