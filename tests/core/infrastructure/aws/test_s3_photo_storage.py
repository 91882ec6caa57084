"""Tests for S3PhotoStorage (validation, key layout, listing and error mapping)."""

import re
from collections.abc import Callable, Iterator, Mapping
from datetime import datetime, timezone
from typing import Any

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from core.config import AppConfig, get_config
from core.infrastructure.aws.s3_photo_storage import (
    S3PhotoStorage,
    parse_storage_key,
    safe_file_name,
)
from core.models.errors import (
    NoFileProvidedError,
    PayloadTooLargeError,
    StorageError,
    UnsupportedMediaTypeError,
)
from core.models.photo import UploadFile
from core.utils.constants import MAX_FILE_SIZE

CONFIG = AppConfig(s3_bucket_name="bucket", s3_region="us-east-1")


def client_error(code: str, operation: str = "Op") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class DummyAdapter:
    """Minimal S3Adapter stub that records calls."""

    put_object: Callable[..., None]
    head_object: Callable[..., Mapping[str, Any]]
    delete_object: Callable[..., None]

    def __init__(self, entries: list[dict[str, Any]] | None = None) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.entries = entries or []
        self.put_object = lambda **kwargs: self.calls.append(("put", kwargs))
        self.head_object = lambda **kwargs: {}
        self.delete_object = lambda **kwargs: self.calls.append(("delete", kwargs))

    def iter_objects(self, *, prefix: str | None = None) -> Iterator[Mapping[str, Any]]:
        yield from self.entries


def image(name: str = "photo.jpg", content: bytes = b"\xff\xd8\xffdata", mime: str = "image/jpeg") -> UploadFile:
    return UploadFile(field_name="photo", filename=name, mime_type=mime, content=content)


class TestHelpers:
    def test_safe_file_name_strips_directories(self) -> None:
        assert safe_file_name("C:\\Users\\me\\cat.png") == "cat.png"
        assert safe_file_name("../../etc/passwd") == "passwd"
        assert safe_file_name("plain.jpg") == "plain.jpg"

    def test_parse_storage_key(self) -> None:
        assert parse_storage_key("u1/1700000000000_my_photo.jpg", "u1/") == (
            1700000000000,
            "my_photo.jpg",
        )
        assert parse_storage_key("1700000000000_a.png") == (1700000000000, "a.png")
        assert parse_storage_key("u1/legacy.png", "u1/") == (None, "legacy.png")


class TestValidate:
    def test_rejects_non_image(self) -> None:
        storage = S3PhotoStorage(CONFIG, DummyAdapter())

        with pytest.raises(UnsupportedMediaTypeError) as exc_info:
            storage.validate(image("doc.pdf", b"%PDF", "application/pdf"))

        assert exc_info.value.message == "Only image files are allowed!"

    def test_rejects_oversized(self) -> None:
        storage = S3PhotoStorage(CONFIG, DummyAdapter())

        with pytest.raises(PayloadTooLargeError):
            storage.validate(image(content=b"x" * (MAX_FILE_SIZE + 1)))

    def test_accepts_exact_ceiling(self) -> None:
        storage = S3PhotoStorage(CONFIG, DummyAdapter())

        storage.validate(image(content=b"x" * MAX_FILE_SIZE))

    def test_rejects_empty(self) -> None:
        storage = S3PhotoStorage(CONFIG, DummyAdapter())

        with pytest.raises(NoFileProvidedError):
            storage.validate(image(content=b""))

    def test_rejects_nameless(self) -> None:
        storage = S3PhotoStorage(CONFIG, DummyAdapter())

        with pytest.raises(NoFileProvidedError):
            storage.validate(image(name="dir/"))


class TestPut:
    def test_put_builds_prefixed_key(self) -> None:
        adapter = DummyAdapter()
        storage = S3PhotoStorage(CONFIG, adapter)

        stored = storage.put(image(), key_prefix="u1/")

        assert re.fullmatch(r"u1/\d{13}_photo\.jpg", stored.key)
        assert stored.size == 7
        assert stored.mime_type == "image/jpeg"
        assert stored.original_name == "photo.jpg"
        assert stored.url == f"https://bucket.s3.us-east-1.amazonaws.com/{stored.key}"

        op, kwargs = adapter.calls[0]
        assert op == "put"
        assert kwargs["content_type"] == "image/jpeg"
        assert kwargs["metadata"] == {"original-name": "photo.jpg"}

    def test_non_ascii_name_is_encoded_in_metadata(self) -> None:
        adapter = DummyAdapter()

        stored = S3PhotoStorage(CONFIG, adapter).put(image("café.jpg"), key_prefix="u1/")

        assert stored.key.endswith("_café.jpg")
        assert stored.original_name == "café.jpg"
        assert adapter.calls[0][1]["metadata"] == {"original-name": "caf%C3%A9.jpg"}

    def test_invalid_upload_never_reaches_storage(self) -> None:
        adapter = DummyAdapter()
        storage = S3PhotoStorage(CONFIG, adapter)

        with pytest.raises(UnsupportedMediaTypeError):
            storage.put(image("doc.pdf", b"%PDF", "application/pdf"))

        assert adapter.calls == []

    def test_timestamps_read_per_call(self, monkeypatch) -> None:
        stamps = iter([1000, 1001])
        monkeypatch.setattr(
            "core.infrastructure.aws.s3_photo_storage.epoch_millis", lambda: next(stamps)
        )
        storage = S3PhotoStorage(CONFIG, DummyAdapter())

        first = storage.put(image("a.jpg"))
        second = storage.put(image("b.jpg"))

        assert (first.key, second.key) == ("1000_a.jpg", "1001_b.jpg")

    @pytest.mark.parametrize("exc", [client_error("InternalError"), RuntimeError("boom")])
    def test_put_failure_maps_to_storage_error(self, exc) -> None:
        adapter = DummyAdapter()

        def fail(**_: Any) -> None:
            raise exc

        adapter.put_object = fail
        storage = S3PhotoStorage(CONFIG, adapter)

        with pytest.raises(StorageError) as exc_info:
            storage.put(image())

        assert exc_info.value.error_code == "PHOTO_UPLOAD_FAILED"


class TestList:
    def test_refilters_provider_results(self) -> None:
        modified = datetime(2024, 1, 1, tzinfo=timezone.utc)
        adapter = DummyAdapter(
            [
                {"Key": "u1/1700000000000_a.jpg", "Size": 10, "LastModified": modified},
                {"Key": "u10/1700000000001_b.jpg", "Size": 11, "LastModified": modified},
                {"Key": "u2/1700000000002_c.jpg", "Size": 12, "LastModified": modified},
                {"Key": "u1/1700000000003_d.jpg", "Size": 13, "LastModified": modified},
            ]
        )
        storage = S3PhotoStorage(CONFIG, adapter)

        listed = list(storage.list(prefix="u1/"))

        assert [obj.key for obj in listed] == ["u1/1700000000000_a.jpg", "u1/1700000000003_d.jpg"]
        assert listed[0].original_name == "a.jpg"
        assert listed[0].last_modified == modified.isoformat()

    def test_stops_at_max_keys(self) -> None:
        adapter = DummyAdapter([{"Key": f"{i}_a.jpg", "Size": 1} for i in range(10)])
        storage = S3PhotoStorage(CONFIG, adapter)

        assert len(list(storage.list(max_keys=3))) == 3

    def test_missing_last_modified_falls_back_to_key_stamp(self) -> None:
        storage = S3PhotoStorage(CONFIG, DummyAdapter([{"Key": "0_a.jpg", "Size": 1}]))

        assert next(iter(storage.list())).last_modified == "1970-01-01T00:00:00+00:00"

    def test_listing_is_lazy(self) -> None:
        pulled: list[int] = []

        class CountingAdapter(DummyAdapter):
            def iter_objects(self, *, prefix: str | None = None):
                for i in range(100):
                    pulled.append(i)
                    yield {"Key": f"{i}_a.jpg", "Size": 1}

        storage = S3PhotoStorage(CONFIG, CountingAdapter())
        iterator = storage.list()
        next(iterator)

        assert pulled == [0]

    def test_list_failure_maps_to_storage_error(self) -> None:
        class FailingAdapter(DummyAdapter):
            def iter_objects(self, *, prefix: str | None = None):
                raise client_error("AccessDenied", "ListObjectsV2")
                yield  # pragma: no cover

        storage = S3PhotoStorage(CONFIG, FailingAdapter())

        with pytest.raises(StorageError):
            list(storage.list())

    def test_connection_failure_maps_to_storage_error(self) -> None:
        class UnreachableAdapter(DummyAdapter):
            def iter_objects(self, *, prefix: str | None = None):
                raise EndpointConnectionError(endpoint_url="https://s3.us-east-1.amazonaws.com")
                yield  # pragma: no cover

        storage = S3PhotoStorage(CONFIG, UnreachableAdapter())

        with pytest.raises(StorageError) as exc_info:
            list(storage.list(prefix="u1/"))

        assert exc_info.value.error_code == "PHOTO_LIST_FAILED"


class TestDeleteAndExists:
    def test_delete_calls_adapter(self) -> None:
        adapter = DummyAdapter()
        S3PhotoStorage(CONFIG, adapter).delete(key="u1/1_a.jpg")

        assert adapter.calls == [("delete", {"key": "u1/1_a.jpg"})]

    def test_delete_failure(self) -> None:
        adapter = DummyAdapter()

        def fail(**_: Any) -> None:
            raise client_error("InternalError", "DeleteObject")

        adapter.delete_object = fail

        with pytest.raises(StorageError):
            S3PhotoStorage(CONFIG, adapter).delete(key="k")

    @pytest.mark.parametrize("code", ["404", "NoSuchKey", "NotFound"])
    def test_exists_false_on_missing(self, code: str) -> None:
        adapter = DummyAdapter()

        def missing(**_: Any) -> None:
            raise client_error(code, "HeadObject")

        adapter.head_object = missing

        assert S3PhotoStorage(CONFIG, adapter).exists(key="k") is False

    def test_exists_other_error(self) -> None:
        adapter = DummyAdapter()

        def forbidden(**_: Any) -> None:
            raise client_error("403", "HeadObject")

        adapter.head_object = forbidden

        with pytest.raises(StorageError):
            S3PhotoStorage(CONFIG, adapter).exists(key="k")


class TestAgainstMotoBucket:
    def test_upload_list_delete_round_trip(self, s3_bucket) -> None:
        storage = S3PhotoStorage(get_config())

        stored = storage.put(image(), key_prefix="u1/")
        storage.put(image("other.jpg"), key_prefix="u2/")

        listed = list(storage.list(prefix="u1/"))
        assert [obj.key for obj in listed] == [stored.key]
        assert listed[0].size == stored.size
        assert storage.exists(key=stored.key) is True

        storage.delete(key=stored.key)
        storage.delete(key=stored.key)

        assert storage.exists(key=stored.key) is False
        assert list(storage.list(prefix="u1/")) == []

    @pytest.mark.parametrize("name", ["café.jpg", "照片.jpg"])
    def test_non_ascii_file_name(self, s3_bucket, name: str) -> None:
        storage = S3PhotoStorage(get_config())

        stored = storage.put(image(name), key_prefix="u1/")

        [listed] = storage.list(prefix="u1/")
        assert listed.key == stored.key
        assert listed.original_name == name
        assert storage.exists(key=stored.key) is True
