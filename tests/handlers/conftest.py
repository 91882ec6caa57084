"""Fixtures for Lambda handler tests: events, context and a stub verifier."""

import base64
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest

from core.models.errors import InvalidTokenError
from core.models.identity import Identity
from core.repositories.token_verifier import TokenVerifier

BOUNDARY = "----handlerboundary"

TOKENS = {
    "token-u1": Identity(subject_id="u1", username="alice"),
    "token-u2": Identity(subject_id="u2", username="bob"),
}


class StubVerifier(TokenVerifier):
    """Accepts the fixed test tokens above and nothing else."""

    def verify(self, token: str) -> Identity:
        try:
            return TOKENS[token]
        except KeyError:
            raise InvalidTokenError(message="Invalid token") from None


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    return SimpleNamespace(
        function_name="test-function",
        memory_limit_in_mb=128,
        invoked_function_arn="arn:aws:lambda:us-east-1:123456789012:function:test-function",
        aws_request_id="req-123",
    )


@pytest.fixture
def stub_auth(monkeypatch) -> StubVerifier:
    verifier = StubVerifier()
    monkeypatch.setattr("core.utils.auth.get_token_verifier", lambda: verifier)
    return verifier


@pytest.fixture
def api_event() -> Callable[..., dict[str, Any]]:
    def _event(
        method: str = "GET",
        path: str = "/",
        *,
        token: str | None = "token-u1",
        query: dict[str, str] | None = None,
        path_params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        body: str | None = None,
        is_base64: bool = False,
    ) -> dict[str, Any]:
        all_headers = dict(headers or {})
        if token:
            all_headers["Authorization"] = f"Bearer {token}"

        return {
            "httpMethod": method,
            "path": path,
            "headers": all_headers,
            "queryStringParameters": query,
            "pathParameters": path_params,
            "body": body,
            "isBase64Encoded": is_base64,
        }

    return _event


@pytest.fixture
def multipart_event(api_event) -> Callable[..., dict[str, Any]]:
    """Build a base64-encoded multipart POST from `(field, filename, content, type)` parts."""

    def _event(
        path: str,
        parts: list[tuple[str, str, bytes, str]],
        *,
        token: str | None = "token-u1",
    ) -> dict[str, Any]:
        body = b""
        for field, filename, content, content_type in parts:
            body += (
                f"--{BOUNDARY}\r\n"
                f'Content-Disposition: form-data; name="{field}"; filename="{filename}"\r\n'
                f"Content-Type: {content_type}\r\n\r\n"
            ).encode()
            body += content + b"\r\n"
        body += f"--{BOUNDARY}--\r\n".encode()

        return api_event(
            "POST",
            path,
            token=token,
            headers={"Content-Type": f"multipart/form-data; boundary={BOUNDARY}"},
            body=base64.b64encode(body).decode(),
            is_base64=True,
        )

    return _event