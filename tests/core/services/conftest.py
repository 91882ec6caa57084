"""Shared fixtures for service tests."""

import pytest

from core.models.identity import Identity
from core.models.photo import UploadFile


@pytest.fixture
def alice() -> Identity:
    return Identity(subject_id="u1", username="alice", email="alice@example.com")


@pytest.fixture
def bob() -> Identity:
    return Identity(subject_id="u2", username="bob")


@pytest.fixture
def make_upload(jpeg_bytes):
    def _make(name: str = "photo.jpg", content: bytes | None = None, mime: str = "image/jpeg"):
        return UploadFile(
            field_name="photo",
            filename=name,
            mime_type=mime,
            content=jpeg_bytes if content is None else content,
        )

    return _make
