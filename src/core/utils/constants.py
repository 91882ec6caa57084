"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Authentication Errors
ERROR_CODE_MISSING_TOKEN = "MISSING_TOKEN"
ERROR_CODE_INVALID_TOKEN = "INVALID_TOKEN"
ERROR_CODE_INACTIVE_USER = "INACTIVE_USER"
ERROR_CODE_VERIFICATION_UNAVAILABLE = "VERIFICATION_UNAVAILABLE"

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"
ERROR_CODE_PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
ERROR_CODE_NO_FILE_PROVIDED = "NO_FILE_PROVIDED"
ERROR_CODE_TOO_MANY_FILES = "TOO_MANY_FILES"

# Access Errors
ERROR_CODE_NOT_OWNED = "ACCESS_DENIED"

# Configuration Errors
ERROR_CODE_STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
ERROR_CODE_AUTH_BACKEND_UNAVAILABLE = "AUTH_BACKEND_UNAVAILABLE"
ERROR_CODE_METADATA_STORE_UNAVAILABLE = "METADATA_STORE_UNAVAILABLE"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_PHOTO_UPLOAD_FAILED = "PHOTO_UPLOAD_FAILED"
ERROR_CODE_PHOTO_LIST_FAILED = "PHOTO_LIST_FAILED"
ERROR_CODE_PHOTO_DELETE_FAILED = "PHOTO_DELETE_FAILED"
ERROR_CODE_PHOTO_HEAD_FAILED = "PHOTO_HEAD_FAILED"

# Metadata / DynamoDB Errors
ERROR_CODE_METADATA_STORE = "METADATA_STORE_ERROR"
ERROR_CODE_METADATA_CREATE_FAILED = "METADATA_CREATE_FAILED"
ERROR_CODE_METADATA_FETCH_FAILED = "METADATA_FETCH_FAILED"
ERROR_CODE_METADATA_DELETE_FAILED = "METADATA_DELETE_FAILED"
ERROR_CODE_METADATA_LIST_FAILED = "METADATA_LIST_FAILED"
ERROR_CODE_USER_LOOKUP_FAILED = "USER_LOOKUP_FAILED"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB in bytes
MAX_FILES_PER_UPLOAD = 10

IMAGE_MIME_PREFIX = "image/"
FALLBACK_MIME_TYPE = "application/octet-stream"

SINGLE_UPLOAD_FIELD = "photo"
MULTI_UPLOAD_FIELDS: Final[frozenset[str]] = frozenset({"photos", "photos[]"})

# ============================================================================
# Storage Key Conventions
# ============================================================================

KEY_TIMESTAMP_SEPARATOR = "_"
USER_PREFIX_SEPARATOR = "/"
DEFAULT_LIST_MAX_KEYS = 1000
S3_PAGE_SIZE = 1000
OBJECT_URL_TEMPLATE = "https://{bucket}.s3.{region}.amazonaws.com/{key}"

# ============================================================================
# Metadata Table Layout
# ============================================================================

PHOTO_ID_PREFIX = "photo_"
OWNER_UPLOADED_INDEX = "owner-uploaded-index"
VISIBILITY_UPLOADED_INDEX = "visibility-uploaded-index"
VISIBILITY_PUBLIC = "public"
VISIBILITY_PRIVATE = "private"

# ============================================================================
# Pagination Constraints
# ============================================================================

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 100

# ============================================================================
# Authentication
# ============================================================================

AUTH_SCHEME_COGNITO = "cognito"
AUTH_SCHEME_JWT = "jwt"
BEARER_PREFIX = "bearer"
DEFAULT_JWT_ALGORITHM = "HS256"
COGNITO_INVALID_TOKEN_CODES: Final[frozenset[str]] = frozenset(
    {"NotAuthorizedException", "UserNotFoundException"}
)

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization"
DEFAULT_CONTENT_TYPE = "application/json"

# ============================================================================
# Metrics
# ============================================================================

METRICS_NAMESPACE = "PhotoGallery"
METRIC_PHOTOS_UPLOADED = "PhotosUploaded"
METRIC_PHOTOS_DELETED = "PhotosDeleted"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_REGION = "AWS_REGION"
ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_PHOTO_S3_BUCKET_NAME = "PHOTO_S3_BUCKET_NAME"
ENV_PHOTO_S3_REGION = "PHOTO_S3_REGION"
ENV_PHOTO_METADATA_TABLE_NAME = "PHOTO_METADATA_TABLE_NAME"
ENV_USER_TABLE_NAME = "USER_TABLE_NAME"
ENV_AUTH_SCHEME = "AUTH_SCHEME"
ENV_COGNITO_REGION = "COGNITO_REGION"
ENV_COGNITO_USER_POOL_ID = "COGNITO_USER_POOL_ID"
ENV_COGNITO_CLIENT_ID = "COGNITO_CLIENT_ID"
ENV_JWT_SECRET = "JWT_SECRET"
ENV_JWT_ALGORITHM = "JWT_ALGORITHM"
ENV_CORS_ORIGIN = "CORS_ORIGIN"

# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)
