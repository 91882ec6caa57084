"""Thin adapter for the Cognito User Pools identity provider."""

from typing import Any, Protocol

import boto3

from core.config import AppConfig


class _Boto3CognitoClient(Protocol):
    def get_user(self, *, AccessToken: str) -> dict[str, Any]: ...


class CognitoAdapterProtocol(Protocol):
    """Minimal Cognito adapter protocol (verifier-facing)."""

    def get_user(self, *, access_token: str) -> dict[str, Any]: ...


class CognitoAdapter:
    """Low-level Cognito operations (mechanical, no error handling)."""

    def __init__(self, config: AppConfig) -> None:
        if not config.cognito_region:
            raise RuntimeError("Cognito region is not configured")

        self._client: _Boto3CognitoClient = boto3.client(
            "cognito-idp",
            endpoint_url=config.aws_endpoint_url,
            region_name=config.cognito_region,
        )

    def get_user(self, *, access_token: str) -> dict[str, Any]:
        """Resolve the user an access token was issued to.

        Raises boto3 exceptions - caught by the verifier.
        """
        return self._client.get_user(AccessToken=access_token)
