"""Bearer authentication for API Gateway proxy events."""

from collections.abc import Mapping
from typing import Any

from aws_lambda_powertools import Logger

from core.dependencies import get_token_verifier
from core.models.identity import Identity
from core.repositories.token_verifier import extract_bearer_token

logger = Logger(UTC=True)


def authenticate(event: Mapping[str, Any]) -> Identity:
    """Verify the event's bearer token and return the caller's identity.

    Raises:
        MissingTokenError: If no bearer token is present
        AuthBackendUnavailableError: If no token verifier is configured
        AuthError: If the verifier rejects the token
    """
    token = extract_bearer_token(event.get("headers"))
    identity = get_token_verifier().verify(token)

    logger.debug("Caller authenticated", extra={"subject_id": identity.subject_id})
    return identity
