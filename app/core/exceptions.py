"""
Custom exceptions for the application.
"""

from fastapi import HTTPException, status


class VoxScribeException(Exception):
    """Base exception for VoxScribe application."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════


class BadRequestError(VoxScribeException):
    """Raised when a required input is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "BAD_REQUEST"


# ═══════════════════════════════════════════════════════════════════════════
# TRANSCRIPTION EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════


class RateLimitedError(VoxScribeException):
    """Raised when the upstream provider throttles the request."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "RATE_LIMITED"

    def __init__(self, message: str, retry_after: int | None = None):
        self.retry_after = retry_after
        super().__init__(message)


class ProviderError(VoxScribeException):
    """Raised when the upstream provider reports an error."""

    code = "PROVIDER_ERROR"

    def __init__(self, message: str, upstream_status: int | None = None):
        self.upstream_status = upstream_status
        super().__init__(message)


class EmptyResultError(VoxScribeException):
    """Raised when the provider succeeded but produced no usable text."""

    code = "EMPTY_RESULT"


# ═══════════════════════════════════════════════════════════════════════════
# EXPORT EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════


class ExportError(VoxScribeException):
    """Raised when a document cannot be built."""

    code = "EXPORT_FAILED"


# ═══════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & RECORD STORE EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════


class AuthenticationError(VoxScribeException):
    """Raised when the identity provider rejects an access token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "NOT_AUTHENTICATED"


class TranscriptFileNotFoundError(VoxScribeException):
    """Raised when a transcript record is not found for the user."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "FILE_NOT_FOUND"


class RecordStoreError(VoxScribeException):
    """Raised when the record store rejects or fails a request."""

    status_code = status.HTTP_502_BAD_GATEWAY
    code = "RECORD_STORE_ERROR"


# ═══════════════════════════════════════════════════════════════════════════
# EXTERNAL API EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════


class ExternalAPIError(VoxScribeException):
    """Raised when an external API call fails at the transport level."""

    code = "EXTERNAL_API_ERROR"


# ═══════════════════════════════════════════════════════════════════════════
# HTTP EXCEPTION HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )
