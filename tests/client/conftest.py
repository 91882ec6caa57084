"""A recording stand-in for `requests.Session`."""

from collections.abc import Callable
from typing import Any

import pytest


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, reason: str = "OK") -> None:
        self.status_code = status_code
        self._body = body
        self.reason = reason

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeSession:
    """Replies from a queue of responses and records each call.

    A file-like `data` argument is drained with `read()` the way the
    HTTP transport would stream it.
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.replies: list[FakeResponse] = []
        self.hooks: list[Callable[[dict[str, Any]], None]] = []
        self.streamed: list[bytes] = []

    def reply(self, status_code: int = 200, body: Any = None, reason: str = "OK") -> None:
        self.replies.append(FakeResponse(status_code, body, reason))

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        call = {"method": method, "url": url, **kwargs}
        self.calls.append(call)

        data = kwargs.get("data")
        if hasattr(data, "read"):
            chunks = []
            while chunk := data.read(8192):
                chunks.append(chunk)
            self.streamed.append(b"".join(chunks))

        for hook in self.hooks:
            hook(call)

        return self.replies.pop(0) if self.replies else FakeResponse(200, {})


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()
