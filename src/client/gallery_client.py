"""HTTP client for the photo gallery API."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, cast
from urllib.parse import quote

import requests
from aws_lambda_powertools import Logger
from urllib3 import encode_multipart_formdata

from client.upload_progress import ProgressBody, UploadProgress

logger = Logger(service="gallery-client", UTC=True)

# (file name, bytes, MIME type)
LocalFile = tuple[str, bytes, str]

DEFAULT_TIMEOUT = 30


class GalleryClientError(Exception):
    """A non-2xx response, carrying the server's error envelope."""

    def __init__(self, message: str, *, status: int, code: str | None = None) -> None:
        self.message = message
        self.status = status
        self.code = code
        super().__init__(message)


class GalleryClient:
    """Thin wrapper over the gallery routes.

    Args:
        base_url: API root, e.g. `https://abc.execute-api.us-east-1.amazonaws.com/prod`
        token: Bearer access token for the protected routes
        session: Optional pre-configured `requests.Session`
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if extra:
            headers.update(extra)
        return headers

    @staticmethod
    def _parse(response: requests.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok:
            body = body if isinstance(body, dict) else {}
            message = body.get("error") or response.reason or "Request failed"
            logger.warning(
                "Gallery API request failed",
                extra={"status": response.status_code, "code": body.get("code")},
            )
            raise GalleryClientError(
                str(message),
                status=response.status_code,
                code=body.get("code"),
            )

        return cast(dict[str, Any], body)

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        headers = self._headers(kwargs.pop("headers", None))
        response = self.session.request(
            method,
            self._url(path),
            headers=headers,
            timeout=self.timeout,
            **kwargs,
        )
        return self._parse(response)

    @staticmethod
    def encode_files(field: str, files: Sequence[LocalFile]) -> tuple[bytes, str]:
        """Build a multipart/form-data body with every file under `field`."""
        fields = [(field, (name, content, mime_type)) for name, content, mime_type in files]
        return encode_multipart_formdata(fields)

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/api/health")

    def upload_photo(self, file: LocalFile) -> dict[str, Any]:
        body, content_type = self.encode_files("photo", [file])
        return self._request(
            "POST",
            "/api/upload",
            data=body,
            headers={"Content-Type": content_type},
        )

    def upload_photos(self, files: Sequence[LocalFile]) -> dict[str, Any]:
        body, content_type = self.encode_files("photos", files)
        return self._request(
            "POST",
            "/api/upload-multiple",
            data=body,
            headers={"Content-Type": content_type},
        )

    def stream_upload(self, files: Sequence[LocalFile]) -> UploadProgress:
        """Start a batch upload that reports progress without blocking the caller.

        The returned stream has not started yet; iterating it (or calling
        `start()`) sends the request on a worker thread.
        """
        body, content_type = self.encode_files("photos", files)

        def send(progress_body: ProgressBody) -> dict[str, Any]:
            return self._request(
                "POST",
                "/api/upload-multiple",
                data=progress_body,
                headers={"Content-Type": content_type},
            )

        return UploadProgress(body, send)

    def list_photos(self, *, page: int = 1, limit: int = 20) -> dict[str, Any]:
        return self._request("GET", "/api/photos", params={"page": page, "limit": limit})

    def list_public_photos(self, *, page: int = 1, limit: int = 20) -> dict[str, Any]:
        return self._request("GET", "/api/photos/public", params={"page": page, "limit": limit})

    def delete_photo(self, photo_ref: str) -> dict[str, Any]:
        """Delete by record id, or by storage key (which may contain `/`)."""
        return self._request("DELETE", f"/api/photos/{quote(photo_ref, safe='/')}")
