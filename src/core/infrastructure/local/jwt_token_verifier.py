"""Local verification of HMAC-signed bearer tokens."""

from typing import Any

import jwt
from aws_lambda_powertools import Logger

from core.config import AppConfig
from core.models.errors import (
    InactiveUserError,
    InvalidTokenError,
    MetadataStoreError,
    VerificationUnavailableError,
)
from core.models.identity import Identity
from core.repositories.token_verifier import TokenVerifier
from core.repositories.user_repository import UserRepository
from core.utils.constants import USER_PREFIX_SEPARATOR

logger = Logger(UTC=True)


class JwtTokenVerifier(TokenVerifier):
    """Verifies tokens signed with a shared secret and resolves their user.

    The subject is read from `sub`, falling back to `userId` for tokens
    issued by older clients.
    """

    def __init__(self, config: AppConfig, users: UserRepository) -> None:
        if not config.jwt_secret:
            raise RuntimeError("JWT secret is not configured")

        self._secret = config.jwt_secret
        self._algorithm = config.jwt_algorithm
        self._users = users

    def _decode(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError(message="Token expired") from exc
        except jwt.InvalidTokenError as exc:
            logger.info("Token rejected", extra={"reason": type(exc).__name__})
            raise InvalidTokenError(message="Invalid token") from exc

    def verify(self, token: str) -> Identity:
        claims = self._decode(token)

        subject_id = claims.get("sub") or claims.get("userId")
        if not subject_id or not isinstance(subject_id, str):
            raise InvalidTokenError(message="Invalid token")

        if USER_PREFIX_SEPARATOR in subject_id:
            logger.info("Token subject is not a valid user id")
            raise InvalidTokenError(message="Invalid token")

        try:
            user = self._users.get_user(user_id=subject_id)
        except MetadataStoreError as exc:
            raise VerificationUnavailableError(
                message="Token verification unavailable",
                details={"user_id": subject_id},
            ) from exc

        if user is None:
            raise InvalidTokenError(message="Invalid token")

        if not user.get("is_active", True):
            logger.info("Inactive user presented a token", extra={"user_id": subject_id})
            raise InactiveUserError(message="User account is inactive")

        return Identity(
            subject_id=subject_id,
            username=user.get("username"),
            email=user.get("email"),
        )
