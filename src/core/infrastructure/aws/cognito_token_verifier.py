"""Token verification delegated to Amazon Cognito User Pools."""

from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.config import AppConfig
from core.infrastructure.adapters.cognito_adapter import CognitoAdapter, CognitoAdapterProtocol
from core.models.errors import InvalidTokenError, VerificationUnavailableError
from core.models.identity import Identity
from core.repositories.token_verifier import TokenVerifier
from core.utils.constants import COGNITO_INVALID_TOKEN_CODES, USER_PREFIX_SEPARATOR

logger = Logger(UTC=True)


class CognitoTokenVerifier(TokenVerifier):
    """Resolves access tokens through Cognito's GetUser operation.

    Cognito rejects expired, revoked and foreign tokens with
    `NotAuthorizedException`; anything else it raises means the
    provider could not answer, not that the token is bad.
    """

    def __init__(
        self,
        config: AppConfig,
        adapter: CognitoAdapterProtocol | None = None,
    ) -> None:
        self._cognito: CognitoAdapterProtocol = adapter or CognitoAdapter(config)

    def verify(self, token: str) -> Identity:
        try:
            response = self._cognito.get_user(access_token=token)

        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")

            if code in COGNITO_INVALID_TOKEN_CODES:
                logger.info("Access token rejected by Cognito", extra={"code": code})
                raise InvalidTokenError(message="Invalid or expired token") from exc

            logger.error("Cognito GetUser failed", extra={"code": code})
            raise VerificationUnavailableError(
                message="Token verification unavailable",
                details={"code": code},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error verifying token with Cognito")
            raise VerificationUnavailableError(
                message="Token verification unavailable",
            ) from exc

        return self._to_identity(response)

    @staticmethod
    def _to_identity(response: dict[str, Any]) -> Identity:
        attributes = {
            attr.get("Name"): attr.get("Value")
            for attr in response.get("UserAttributes") or []
        }

        subject_id = attributes.get("sub")
        if not subject_id:
            logger.warning("Cognito user has no sub attribute")
            raise InvalidTokenError(message="Invalid or expired token")

        if USER_PREFIX_SEPARATOR in subject_id:
            logger.warning("Cognito sub is not a valid user id")
            raise InvalidTokenError(message="Invalid or expired token")

        return Identity(
            subject_id=subject_id,
            username=attributes.get("preferred_username") or response.get("Username"),
            email=attributes.get("email"),
        )
