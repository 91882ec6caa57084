"""
Dependency wiring for the Lambda handlers.

Clients are built on first use and kept for the life of the execution
environment, so warm invocations reuse the same boto3 connections.
"""

from __future__ import annotations

from core.config import AppConfig, get_config
from core.infrastructure.aws.cognito_token_verifier import CognitoTokenVerifier
from core.infrastructure.aws.dynamodb_photo_metadata import DynamoDBPhotoMetadata
from core.infrastructure.aws.dynamodb_users import DynamoDBUsers
from core.infrastructure.aws.s3_photo_storage import S3PhotoStorage
from core.infrastructure.local.jwt_token_verifier import JwtTokenVerifier
from core.models.errors import AuthBackendUnavailableError, StorageUnavailableError
from core.repositories.token_verifier import TokenVerifier
from core.services.metadata_photo_service import MetadataPhotoService
from core.services.photo_service import PhotoService
from core.services.storage_photo_service import StorageOnlyPhotoService
from core.utils.constants import AUTH_SCHEME_COGNITO

_photo_service: PhotoService | None = None
_token_verifier: TokenVerifier | None = None


def build_photo_service(config: AppConfig) -> PhotoService:
    """Pick the implementation for this deployment's mode."""
    if not config.storage_configured:
        raise StorageUnavailableError(
            message="AWS S3 not configured. Please set up your environment variables.",
        )

    storage = S3PhotoStorage(config)

    if config.metadata_configured:
        return MetadataPhotoService(config, storage, DynamoDBPhotoMetadata(config))

    return StorageOnlyPhotoService(config, storage)


def build_token_verifier(config: AppConfig) -> TokenVerifier:
    if not config.auth_configured:
        raise AuthBackendUnavailableError(
            message="Authentication is not configured",
        )

    if config.auth_scheme == AUTH_SCHEME_COGNITO:
        return CognitoTokenVerifier(config)

    return JwtTokenVerifier(config, DynamoDBUsers(config))


def get_photo_service() -> PhotoService:
    """
    Return the process-wide photo service.
    """
    global _photo_service
    if _photo_service:
        return _photo_service

    _photo_service = build_photo_service(get_config())
    return _photo_service


def get_token_verifier() -> TokenVerifier:
    """
    Return the process-wide token verifier.
    """
    global _token_verifier
    if _token_verifier:
        return _token_verifier

    _token_verifier = build_token_verifier(get_config())
    return _token_verifier


def reset_dependencies() -> None:
    """Drop cached clients and configuration (tests and re-configuration)."""
    global _photo_service, _token_verifier
    _photo_service = None
    _token_verifier = None
    get_config.cache_clear()
