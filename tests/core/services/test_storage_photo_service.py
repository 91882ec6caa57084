"""Tests for StorageOnlyPhotoService against a moto bucket."""

import pytest

from core.config import get_config
from core.infrastructure.aws.s3_photo_storage import S3PhotoStorage
from core.models.errors import (
    MetadataStoreUnavailableError,
    NoFileProvidedError,
    NotOwnedError,
    UnsupportedMediaTypeError,
)
from core.services.storage_photo_service import StorageOnlyPhotoService


@pytest.fixture
def service(storage_only_mode, s3_bucket) -> StorageOnlyPhotoService:
    config = get_config()
    return StorageOnlyPhotoService(config, S3PhotoStorage(config))


class TestUpload:
    def test_upload_then_list(self, service, alice, make_upload, bucket_keys) -> None:
        [descriptor] = service.upload(alice, [make_upload("cat.jpg")])

        assert descriptor.id == descriptor.name
        assert descriptor.name.startswith("u1/")
        assert descriptor.name.endswith("_cat.jpg")
        assert descriptor.type == "image/jpeg"
        assert bucket_keys() == [descriptor.name]

        body = service.list_photos(alice, page=1, limit=20)

        assert "pagination" not in body
        assert [photo["key"] for photo in body["photos"]] == [descriptor.name]
        assert body["photos"][0]["originalName"] == "cat.jpg"

    def test_empty_batch(self, service, alice) -> None:
        with pytest.raises(NoFileProvidedError) as exc_info:
            service.upload(alice, [])

        assert exc_info.value.message == "No file uploaded"

    def test_non_image_is_not_stored(self, service, alice, make_upload, bucket_keys) -> None:
        with pytest.raises(UnsupportedMediaTypeError):
            service.upload(alice, [make_upload("doc.pdf", b"%PDF-1.4", "application/pdf")])

        assert bucket_keys() == []

    def test_one_bad_file_rejects_whole_batch(self, service, alice, make_upload, bucket_keys) -> None:
        batch = [make_upload("a.jpg"), make_upload("b.txt", b"hello", "text/plain"), make_upload("c.jpg")]

        with pytest.raises(UnsupportedMediaTypeError):
            service.upload(alice, batch)

        assert bucket_keys() == []

    def test_batch_preserves_order(self, service, alice, make_upload) -> None:
        descriptors = service.upload(alice, [make_upload("one.jpg"), make_upload("two.jpg")])

        assert [d.name.rsplit("_", 1)[-1] for d in descriptors] == ["one.jpg", "two.jpg"]


class TestList:
    def test_only_own_photos(self, service, alice, bob, make_upload) -> None:
        service.upload(alice, [make_upload("mine.jpg")])
        service.upload(bob, [make_upload("theirs.jpg")])

        keys = [photo["key"] for photo in service.list_photos(alice, page=1, limit=20)["photos"]]

        assert len(keys) == 1
        assert all(key.startswith("u1/") for key in keys)

    def test_prefix_is_not_a_string_prefix_of_ids(self, service, make_upload) -> None:
        from core.models.identity import Identity

        u1 = Identity(subject_id="u1")
        u10 = Identity(subject_id="u10")
        service.upload(u10, [make_upload()])

        assert service.list_photos(u1, page=1, limit=20) == {"photos": []}

    def test_listing_is_repeatable(self, service, alice, make_upload) -> None:
        service.upload(alice, [make_upload("a.jpg"), make_upload("b.jpg")])

        assert service.list_photos(alice, page=1, limit=20) == service.list_photos(
            alice, page=1, limit=20
        )

    def test_public_listing_needs_metadata(self, service) -> None:
        with pytest.raises(MetadataStoreUnavailableError) as exc_info:
            service.list_public(page=1, limit=20)

        assert exc_info.value.status == 503


class TestDelete:
    def test_delete_own_photo(self, service, alice, make_upload, bucket_keys) -> None:
        [descriptor] = service.upload(alice, [make_upload()])

        service.delete_photo(alice, descriptor.name)

        assert bucket_keys() == []
        assert service.list_photos(alice, page=1, limit=20) == {"photos": []}

    def test_delete_foreign_key_is_refused_without_touching_storage(
        self, service, alice, bob, make_upload, bucket_keys, monkeypatch
    ) -> None:
        [descriptor] = service.upload(alice, [make_upload()])
        deleted: list[str] = []
        monkeypatch.setattr(service.storage, "delete", lambda *, key: deleted.append(key))

        with pytest.raises(NotOwnedError) as exc_info:
            service.delete_photo(bob, descriptor.name)

        assert exc_info.value.status == 403
        assert exc_info.value.message == "Access denied"
        assert deleted == []
        assert bucket_keys() == [descriptor.name]

    def test_delete_missing_key_succeeds(self, service, alice) -> None:
        service.delete_photo(alice, "u1/1700000000000_gone.jpg")
