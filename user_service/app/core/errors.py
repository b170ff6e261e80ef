class ServiceError(Exception):
    """Base class for errors surfaced to the HTTP layer."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    status_code = 404


class PersistenceError(ServiceError):
    status_code = 500
