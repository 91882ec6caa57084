"""Custom exception classes for the photo service.

Every error carries the HTTP status it surfaces as, so the handler
decorator can translate the whole taxonomy in one place.
"""

from http import HTTPStatus
from typing import Any, ClassVar

from core.utils.constants import (
    ERROR_CODE_AUTH_BACKEND_UNAVAILABLE,
    ERROR_CODE_INACTIVE_USER,
    ERROR_CODE_INTERNAL_ERROR,
    ERROR_CODE_INVALID_TOKEN,
    ERROR_CODE_METADATA_STORE,
    ERROR_CODE_METADATA_STORE_UNAVAILABLE,
    ERROR_CODE_MISSING_TOKEN,
    ERROR_CODE_NO_FILE_PROVIDED,
    ERROR_CODE_NOT_OWNED,
    ERROR_CODE_PAYLOAD_TOO_LARGE,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORAGE,
    ERROR_CODE_STORAGE_UNAVAILABLE,
    ERROR_CODE_TOO_MANY_FILES,
    ERROR_CODE_UNSUPPORTED_MEDIA_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
    ERROR_CODE_VERIFICATION_UNAVAILABLE,
)


class PhotoServiceError(Exception):
    """
    Base exception for all photo service errors.

    All custom errors must inherit from this class.
    Subclasses provide a default error code and HTTP status.
    Optional contextual information can be supplied via `details`.
    """

    status: ClassVar[HTTPStatus] = HTTPStatus.INTERNAL_SERVER_ERROR
    default_code: ClassVar[str] = ERROR_CODE_INTERNAL_ERROR

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}

        super().__init__(self.message)


# ============================================================================
# Authentication
# ============================================================================


class AuthError(PhotoServiceError):
    """Raised when the caller cannot be authenticated."""

    status = HTTPStatus.UNAUTHORIZED
    default_code = ERROR_CODE_INVALID_TOKEN


class MissingTokenError(AuthError):
    """No bearer token was presented."""

    default_code = ERROR_CODE_MISSING_TOKEN


class InvalidTokenError(AuthError):
    """The token is malformed, expired, or rejected by the provider."""

    default_code = ERROR_CODE_INVALID_TOKEN


class InactiveUserError(AuthError):
    """The token resolved to a disabled account."""

    default_code = ERROR_CODE_INACTIVE_USER


class VerificationUnavailableError(AuthError):
    """The identity provider failed for a reason unrelated to the token."""

    status = HTTPStatus.SERVICE_UNAVAILABLE
    default_code = ERROR_CODE_VERIFICATION_UNAVAILABLE


# ============================================================================
# Validation
# ============================================================================


class ValidationError(PhotoServiceError):
    """Raised when request validation fails."""

    status = HTTPStatus.BAD_REQUEST
    default_code = ERROR_CODE_VALIDATION_FAILED


class UnsupportedMediaTypeError(ValidationError):
    default_code = ERROR_CODE_UNSUPPORTED_MEDIA_TYPE


class PayloadTooLargeError(ValidationError):
    default_code = ERROR_CODE_PAYLOAD_TOO_LARGE


class NoFileProvidedError(ValidationError):
    default_code = ERROR_CODE_NO_FILE_PROVIDED


class TooManyFilesError(ValidationError):
    default_code = ERROR_CODE_TOO_MANY_FILES


class InvalidRequestError(ValidationError):
    """Malformed query string, path, or body."""


# ============================================================================
# Access
# ============================================================================


class AccessError(PhotoServiceError):
    """Raised when the caller is authenticated but not allowed."""

    status = HTTPStatus.FORBIDDEN
    default_code = ERROR_CODE_NOT_OWNED


class NotOwnedError(AccessError):
    """The target photo belongs to another user."""


# ============================================================================
# Configuration
# ============================================================================


class ConfigError(PhotoServiceError):
    """Raised when a backing service is not configured for this deployment."""

    status = HTTPStatus.SERVICE_UNAVAILABLE
    default_code = ERROR_CODE_STORAGE_UNAVAILABLE


class StorageUnavailableError(ConfigError):
    default_code = ERROR_CODE_STORAGE_UNAVAILABLE


class AuthBackendUnavailableError(ConfigError):
    default_code = ERROR_CODE_AUTH_BACKEND_UNAVAILABLE


class MetadataStoreUnavailableError(ConfigError):
    default_code = ERROR_CODE_METADATA_STORE_UNAVAILABLE


# ============================================================================
# Not found / infrastructure
# ============================================================================


class NotFoundError(PhotoServiceError):
    """Raised when a requested resource is not found."""

    status = HTTPStatus.NOT_FOUND
    default_code = ERROR_CODE_RESOURCE_NOT_FOUND


class StorageError(PhotoServiceError):
    """Raised when an object storage operation fails."""

    default_code = ERROR_CODE_STORAGE


class MetadataStoreError(PhotoServiceError):
    """Raised when a metadata database operation fails."""

    default_code = ERROR_CODE_METADATA_STORE


class UnexpectedError(PhotoServiceError):
    """Catch-all for failures that have no closer taxonomy entry."""
