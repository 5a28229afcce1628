"""Error taxonomy shared by services, the auth guard and routers.

Each error maps to one HTTP status. The handlers registered in
``artmarket.main`` render them in the same JSON shape as any other
HTTP error, so services never need to import FastAPI.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors reported to the caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type: str = "server_error"
    headers: dict[str, str] | None = None

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(AppError):
    """Missing or malformed input the caller can correct."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_type = "validation"


class Unauthorized(AppError):
    """Missing, invalid or expired token, or a token for a vanished identity."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "auth"
    headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(AppError):
    """Valid identity acting on something it does not own."""

    status_code = status.HTTP_403_FORBIDDEN
    error_type = "auth"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error_type = "not_found"


class UpstreamError(AppError):
    """A third-party relay (image host, geocoder) failed."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error_type = "upstream"


class ConfigurationError(AppError):
    """The server is missing a setting it needs to serve the request."""


class InvalidToken(Exception):
    """Raised by the token service; the guard turns it into ``Unauthorized``."""
