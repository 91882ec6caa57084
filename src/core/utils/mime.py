from collections.abc import Mapping

from core.utils.constants import FALLBACK_MIME_TYPE

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
    b"%PDF": "application/pdf",
}


def detect_mime_type(file_data: bytes) -> str:
    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    # RIFF is shared by several containers; only WEBP is an image
    if file_data.startswith(b"RIFF") and file_data[8:12] == b"WEBP":
        return "image/webp"

    return FALLBACK_MIME_TYPE


def resolve_mime_type(declared: str | None, file_data: bytes) -> str:
    """Prefer the declared part type, sniffing only when it is missing or generic."""
    declared = (declared or "").split(";", 1)[0].strip().lower()

    if declared and declared != FALLBACK_MIME_TYPE:
        return declared

    return detect_mime_type(file_data)
