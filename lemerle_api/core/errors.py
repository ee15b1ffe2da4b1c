"""Error variants raised by the service layer.

Each variant carries a message key from the i18n catalog; the exception
handlers in ``main`` turn it into a status code and a localized message.
"""
from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_key: str = "internal_error"

    def __init__(self, key: str | None = None, **params: object) -> None:
        self.key = key or self.default_key
        self.params = params
        super().__init__(self.key)


class ValidationError(AppError):
    """Client input rejected: malformed payload, past date, out-of-hours slot."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_key = "invalid_payload"


class ConflictError(AppError):
    """Requested slot is already booked."""

    status_code = status.HTTP_409_CONFLICT
    default_key = "slot_taken"


class StoreError(AppError):
    """Database failure (connection or query)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_key = "store_error"


class UpstreamError(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_key = "chat_upstream_error"


class ConfigurationError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_key = "chat_unavailable"
