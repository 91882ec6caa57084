"""
Process-wide configuration.

The environment is read exactly once, into an immutable `AppConfig`.
Components receive the config (or objects built from it) instead of
looking up environment variables themselves.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from functools import lru_cache
from typing import Literal
from urllib.parse import quote

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field

from core.utils.constants import (
    AUTH_SCHEME_COGNITO,
    AUTH_SCHEME_JWT,
    CORS_ORIGIN,
    DEFAULT_JWT_ALGORITHM,
    ENV_AUTH_SCHEME,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_COGNITO_CLIENT_ID,
    ENV_COGNITO_REGION,
    ENV_COGNITO_USER_POOL_ID,
    ENV_CORS_ORIGIN,
    ENV_JWT_ALGORITHM,
    ENV_JWT_SECRET,
    ENV_PHOTO_METADATA_TABLE_NAME,
    ENV_PHOTO_S3_BUCKET_NAME,
    ENV_PHOTO_S3_REGION,
    ENV_USER_TABLE_NAME,
    OBJECT_URL_TEMPLATE,
)

logger = Logger(UTC=True)

AuthScheme = Literal["cognito", "jwt"]


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class AppConfig(BaseModel):
    """Immutable deployment configuration."""

    model_config = ConfigDict(frozen=True)

    aws_region: str | None = None
    aws_endpoint_url: str | None = None

    s3_bucket_name: str | None = None
    s3_region: str | None = None

    metadata_table_name: str | None = None
    user_table_name: str | None = None

    auth_scheme: AuthScheme | None = None
    cognito_region: str | None = None
    cognito_user_pool_id: str | None = None
    cognito_client_id: str | None = None
    jwt_secret: str | None = Field(default=None, repr=False)
    jwt_algorithm: str = DEFAULT_JWT_ALGORITHM

    cors_origin: str = CORS_ORIGIN

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Build the configuration from environment variables.

        `AUTH_SCHEME` selects the token verifier explicitly; when unset the
        Cognito group wins if complete, then the local JWT group.
        """
        env = os.environ if environ is None else environ

        aws_region = _clean(env.get(ENV_AWS_REGION))
        cognito_region = _clean(env.get(ENV_COGNITO_REGION)) or aws_region
        cognito_pool = _clean(env.get(ENV_COGNITO_USER_POOL_ID))
        cognito_client = _clean(env.get(ENV_COGNITO_CLIENT_ID))
        jwt_secret = _clean(env.get(ENV_JWT_SECRET))

        scheme = _clean(env.get(ENV_AUTH_SCHEME))
        if scheme:
            scheme = scheme.lower()
            if scheme not in (AUTH_SCHEME_COGNITO, AUTH_SCHEME_JWT):
                logger.warning(
                    "Unknown auth scheme, authentication disabled",
                    extra={"auth_scheme": scheme},
                )
                scheme = None
        elif cognito_pool and cognito_client and cognito_region:
            scheme = AUTH_SCHEME_COGNITO
        elif jwt_secret:
            scheme = AUTH_SCHEME_JWT

        return cls(
            aws_region=aws_region,
            aws_endpoint_url=_clean(env.get(ENV_AWS_ENDPOINT_URL)),
            s3_bucket_name=_clean(env.get(ENV_PHOTO_S3_BUCKET_NAME)),
            s3_region=_clean(env.get(ENV_PHOTO_S3_REGION)) or aws_region,
            metadata_table_name=_clean(env.get(ENV_PHOTO_METADATA_TABLE_NAME)),
            user_table_name=_clean(env.get(ENV_USER_TABLE_NAME)),
            auth_scheme=scheme,
            cognito_region=cognito_region,
            cognito_user_pool_id=cognito_pool,
            cognito_client_id=cognito_client,
            jwt_secret=jwt_secret,
            jwt_algorithm=_clean(env.get(ENV_JWT_ALGORITHM)) or DEFAULT_JWT_ALGORITHM,
            cors_origin=_clean(env.get(ENV_CORS_ORIGIN)) or CORS_ORIGIN,
        )

    @property
    def storage_configured(self) -> bool:
        return bool(self.s3_bucket_name and self.s3_region)

    @property
    def metadata_configured(self) -> bool:
        return bool(self.metadata_table_name)

    @property
    def auth_configured(self) -> bool:
        if self.auth_scheme == AUTH_SCHEME_COGNITO:
            return bool(
                self.cognito_region and self.cognito_user_pool_id and self.cognito_client_id
            )
        if self.auth_scheme == AUTH_SCHEME_JWT:
            return bool(self.jwt_secret and self.user_table_name)
        return False

    @property
    def mode(self) -> Literal["metadata", "storage"]:
        return "metadata" if self.metadata_configured else "storage"

    def object_url(self, key: str) -> str:
        """Public virtual-hosted URL of an object in the photo bucket."""
        return OBJECT_URL_TEMPLATE.format(
            bucket=self.s3_bucket_name,
            region=self.s3_region,
            key=quote(key, safe="/"),
        )


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Return the process-lifetime configuration."""
    config = AppConfig.from_env()

    logger.info(
        "Configuration loaded",
        extra={
            "mode": config.mode,
            "storage_configured": config.storage_configured,
            "auth_scheme": config.auth_scheme,
            "auth_configured": config.auth_configured,
        },
    )

    return config
