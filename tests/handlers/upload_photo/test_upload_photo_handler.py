import json
from unittest.mock import patch

import pytest

from core.models.errors import StorageError
from core.utils.constants import MAX_FILE_SIZE
from handlers.upload_photo.handler import handler


class TestUploadPhotoHandler:
    def test_upload_success(
        self, aws_mock, s3_bucket, photo_table, stub_auth, multipart_event, lambda_context, jpeg_bytes, bucket_keys
    ) -> None:
        event = multipart_event("/api/upload", [("photo", "cat.jpg", jpeg_bytes, "image/jpeg")])

        response = handler(event, lambda_context)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["message"] == "File uploaded successfully"

        file = body["file"]
        assert file["id"].startswith("photo_")
        assert file["name"].startswith("u1/")
        assert file["name"].endswith("_cat.jpg")
        assert file["size"] == len(jpeg_bytes)
        assert file["type"] == "image/jpeg"
        assert "uploadedAt" in file
        assert bucket_keys() == [file["name"]]

    @pytest.mark.parametrize("name", ["café.jpg", "照片.jpg"])
    def test_non_ascii_file_name(
        self, name, aws_mock, s3_bucket, photo_table, stub_auth, multipart_event, lambda_context, jpeg_bytes, bucket_keys
    ) -> None:
        event = multipart_event("/api/upload", [("photo", name, jpeg_bytes, "image/jpeg")])

        response = handler(event, lambda_context)

        assert response["statusCode"] == 200
        file = json.loads(response["body"])["file"]
        assert file["name"].endswith(f"_{name}")
        assert bucket_keys() == [file["name"]]

    def test_storage_only_id_is_key(
        self, storage_only_mode, s3_bucket, stub_auth, multipart_event, lambda_context, png_bytes
    ) -> None:
        event = multipart_event("/api/upload", [("photo", "dot.png", png_bytes, "image/png")])

        file = json.loads(handler(event, lambda_context)["body"])["file"]

        assert file["id"] == file["name"]

    def test_missing_token(self, multipart_event, lambda_context, jpeg_bytes) -> None:
        event = multipart_event("/api/upload", [("photo", "a.jpg", jpeg_bytes, "image/jpeg")], token=None)

        response = handler(event, lambda_context)

        assert response["statusCode"] == 401
        body = json.loads(response["body"])
        assert body["error"] == "Access token required"
        assert body["code"] == "MISSING_TOKEN"
        assert body["request_id"] == "req-123"

    def test_invalid_token(self, stub_auth, multipart_event, lambda_context, jpeg_bytes) -> None:
        event = multipart_event("/api/upload", [("photo", "a.jpg", jpeg_bytes, "image/jpeg")], token="forged")

        assert handler(event, lambda_context)["statusCode"] == 401

    def test_non_image_rejected(
        self, aws_mock, s3_bucket, photo_table, stub_auth, multipart_event, lambda_context, bucket_keys
    ) -> None:
        event = multipart_event("/api/upload", [("photo", "doc.pdf", b"%PDF-1.4", "application/pdf")])

        response = handler(event, lambda_context)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["error"] == "Only image files are allowed!"
        assert bucket_keys() == []

    def test_too_large(
        self, aws_mock, s3_bucket, photo_table, stub_auth, multipart_event, lambda_context, bucket_keys
    ) -> None:
        content = b"\xff\xd8\xff" + b"x" * MAX_FILE_SIZE
        event = multipart_event("/api/upload", [("photo", "big.jpg", content, "image/jpeg")])

        response = handler(event, lambda_context)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["code"] == "PAYLOAD_TOO_LARGE"
        assert bucket_keys() == []

    def test_no_file(self, aws_mock, s3_bucket, photo_table, stub_auth, api_event, lambda_context) -> None:
        event = api_event(
            "POST",
            "/api/upload",
            headers={"Content-Type": "multipart/form-data; boundary=xyz"},
            body="--xyz--\r\n",
        )

        response = handler(event, lambda_context)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["error"] == "No file uploaded"

    @pytest.mark.parametrize("field", ["photos", "avatar"])
    def test_wrong_field(
        self, field, aws_mock, s3_bucket, photo_table, stub_auth, multipart_event, lambda_context, jpeg_bytes
    ) -> None:
        event = multipart_event("/api/upload", [(field, "a.jpg", jpeg_bytes, "image/jpeg")])

        assert handler(event, lambda_context)["statusCode"] == 400

    def test_storage_not_configured(self, monkeypatch, stub_auth, multipart_event, lambda_context, jpeg_bytes) -> None:
        from core.dependencies import reset_dependencies

        monkeypatch.delenv("PHOTO_S3_BUCKET_NAME")
        reset_dependencies()
        event = multipart_event("/api/upload", [("photo", "a.jpg", jpeg_bytes, "image/jpeg")])

        response = handler(event, lambda_context)

        assert response["statusCode"] == 503
        assert json.loads(response["body"])["error"] == (
            "AWS S3 not configured. Please set up your environment variables."
        )

    def test_storage_failure_is_500(
        self, aws_mock, s3_bucket, photo_table, stub_auth, multipart_event, lambda_context, jpeg_bytes
    ) -> None:
        with patch(
            "core.infrastructure.aws.s3_photo_storage.S3PhotoStorage.put",
            side_effect=StorageError(message="Unable to upload photo at this time"),
        ):
            event = multipart_event("/api/upload", [("photo", "a.jpg", jpeg_bytes, "image/jpeg")])
            response = handler(event, lambda_context)

        assert response["statusCode"] == 500
        assert json.loads(response["body"])["code"] == "STORAGE_ERROR"

    def test_options_preflight(self, lambda_context) -> None:
        response = handler({"httpMethod": "OPTIONS"}, lambda_context)

        assert response["statusCode"] == 204
        assert response["body"] == ""
