"""Typed service-layer errors that routers translate into HTTP responses."""


class ServiceError(Exception):
    """
    Expected, client-facing failure (validation, resource state, not found).

    message is safe to return to the caller; status_code is the HTTP status
    the router should use.
    """

    status_code = 400

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationFailed(ServiceError):
    """Input rejected before any storage access."""

    status_code = 400


class NotFound(ServiceError):
    status_code = 404


class Forbidden(ServiceError):
    status_code = 403
