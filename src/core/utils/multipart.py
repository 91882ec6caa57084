"""Extraction of uploaded files from multipart/form-data proxy events."""

import base64
import binascii
from collections.abc import Collection, Mapping
from typing import Any

from aws_lambda_powertools import Logger
from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from core.models.errors import InvalidRequestError, TooManyFilesError
from core.models.photo import UploadFile
from core.utils.mime import resolve_mime_type

logger = Logger(UTC=True)

Part = tuple[dict[bytes, bytes], bytes]


def get_header(headers: Mapping[str, str] | None, name: str) -> str | None:
    """Case-insensitive header lookup (API Gateway preserves client casing)."""
    name = name.lower()
    for key, value in (headers or {}).items():
        if key.lower() == name:
            return value
    return None


def read_body(event: Mapping[str, Any]) -> bytes:
    """Return the raw request body, undoing API Gateway's base64 encoding."""
    body = event.get("body") or ""

    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidRequestError(message="Request body is not valid base64") from exc

    if isinstance(body, bytes):
        return body
    return body.encode("utf-8")


class _PartCollector:
    """python-multipart callbacks that buffer each part's headers and bytes."""

    def __init__(self) -> None:
        self.parts: list[Part] = []
        self._headers: dict[bytes, bytes] = {}
        self._header_field = bytearray()
        self._header_value = bytearray()
        self._data = bytearray()

    def callbacks(self) -> dict[str, Any]:
        return {
            "on_part_begin": self.on_part_begin,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
        }

    def on_part_begin(self) -> None:
        self._headers = {}
        self._data = bytearray()

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        self._data += data[start:end]

    def on_part_end(self) -> None:
        self.parts.append((self._headers, bytes(self._data)))

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def on_header_end(self) -> None:
        self._headers[bytes(self._header_field).lower()] = bytes(self._header_value)
        self._header_field = bytearray()
        self._header_value = bytearray()


def parse_upload_files(
    event: Mapping[str, Any],
    *,
    allowed_fields: Collection[str],
    max_files: int,
) -> list[UploadFile]:
    """Parse the file parts of a multipart upload event.

    Non-file form fields are ignored. A part's MIME type is the declared
    `Content-Type`, sniffed from its bytes when missing or generic.

    Raises:
        InvalidRequestError: If the body is not multipart or a file arrives
            under a field name outside `allowed_fields`
        TooManyFilesError: If more than `max_files` files are sent
    """
    content_type = get_header(event.get("headers"), "content-type") or ""
    mime, params = parse_options_header(content_type)
    boundary = params.get(b"boundary")

    if mime.strip().lower() != b"multipart/form-data" or not boundary:
        raise InvalidRequestError(
            message="Expected a multipart/form-data request",
            details={"content_type": content_type},
        )

    collector = _PartCollector()
    parser = MultipartParser(boundary, collector.callbacks())

    try:
        parser.write(read_body(event))
        parser.finalize()
    except MultipartParseError as exc:
        logger.warning("Malformed multipart body", extra={"error": str(exc)})
        raise InvalidRequestError(message="Malformed multipart body") from exc

    files: list[UploadFile] = []

    for headers, content in collector.parts:
        _, disposition = parse_options_header(headers.get(b"content-disposition", b""))
        filename = disposition.get(b"filename")
        # Browsers send an empty, unnamed part for an untouched file input
        if filename is None or (not filename and not content):
            continue

        field_name = disposition.get(b"name", b"").decode("utf-8", "replace")
        if field_name not in allowed_fields:
            raise InvalidRequestError(
                message="Unexpected field",
                details={"field": field_name},
            )

        if len(files) >= max_files:
            raise TooManyFilesError(
                message=f"Too many files. Maximum is {max_files}",
                details={"max_files": max_files},
            )

        declared = headers.get(b"content-type", b"").decode("latin-1")
        files.append(
            UploadFile(
                field_name=field_name,
                filename=filename.decode("utf-8", "replace"),
                mime_type=resolve_mime_type(declared, content),
                content=content,
            )
        )

    logger.debug("Multipart body parsed", extra={"file_count": len(files)})
    return files
