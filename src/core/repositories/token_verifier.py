"""Abstract contract for bearer token verification."""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from core.models.errors import MissingTokenError
from core.models.identity import Identity
from core.utils.constants import BEARER_PREFIX


class TokenVerifier(ABC):
    """Turns a bearer token into a verified identity.

    Verification must be side-effect free: it never mutates caller data.
    """

    @abstractmethod
    def verify(self, token: str) -> Identity:
        """Verify `token` and return the caller's identity.

        Raises:
            InvalidTokenError: If the token is rejected
            InactiveUserError: If the account is disabled
            VerificationUnavailableError: If the backend cannot answer
        """


def extract_bearer_token(headers: Mapping[str, str] | None) -> str:
    """Return the token from an `Authorization: Bearer <token>` header.

    Raises:
        MissingTokenError: If the header is absent, not a bearer header, or empty
    """
    value = None
    for name, header_value in (headers or {}).items():
        if name.lower() == "authorization":
            value = header_value
            break

    if not value:
        raise MissingTokenError(message="Access token required")

    scheme, _, token = value.strip().partition(" ")
    token = token.strip()

    if scheme.lower() != BEARER_PREFIX or not token:
        raise MissingTokenError(message="Access token required")

    return token
