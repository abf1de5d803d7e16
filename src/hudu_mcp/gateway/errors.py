"""Failure types raised by the Hudu gateway."""


class GatewayError(Exception):
    """Base error for all gateway failures."""


class ApiError(GatewayError):
    """The backend answered with a non-2xx status (or an unreadable body)."""

    def __init__(self, status: int, message: str = "") -> None:
        self.status = status
        self.message = message
        super().__init__(f"{message} (HTTP {status})" if message else f"HTTP {status}")


class NotFoundError(ApiError):
    """The backend returned 404."""


class UnauthorizedError(ApiError):
    """The backend returned 401 or 403."""


class NetworkError(GatewayError):
    """The request never produced an HTTP response (timeout, DNS, refused)."""


class UnsupportedOperationError(GatewayError):
    """The resource does not support the requested operation."""

    def __init__(self, resource: str, operation: str) -> None:
        self.resource = resource
        self.operation = operation
        super().__init__(f"{resource} does not support {operation}")


def error_for_status(status: int, message: str) -> ApiError:
    """Map an HTTP status to the matching :class:`ApiError` subclass."""
    if status == 404:
        return NotFoundError(status, message)
    if status in (401, 403):
        return UnauthorizedError(status, message)
    return ApiError(status, message)
