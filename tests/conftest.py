"""
Pytest configuration and fixtures for photo gallery tests.
Provides AWS mocking, DynamoDB and S3 fixtures with proper cleanup.
"""

import os
from collections.abc import Callable
from typing import Any

# Deterministic environment for every test; set before any core import
os.environ.update(
    {
        "AWS_REGION": "us-east-1",
        "AWS_DEFAULT_REGION": "us-east-1",
        "AWS_ACCESS_KEY_ID": "testing",
        "AWS_SECRET_ACCESS_KEY": "testing",
        "AWS_SECURITY_TOKEN": "testing",
        "AWS_SESSION_TOKEN": "testing",
        "PHOTO_S3_BUCKET_NAME": "test-photo-bucket",
        "PHOTO_S3_REGION": "us-east-1",
        "PHOTO_METADATA_TABLE_NAME": "test-photo-metadata",
        "USER_TABLE_NAME": "test-users",
        "AUTH_SCHEME": "jwt",
        "JWT_SECRET": "test-secret",
        "POWERTOOLS_TRACE_DISABLED": "1",
        "POWERTOOLS_SERVICE_NAME": "photo-gallery-test",
    }
)
for _name in ("AWS_ENDPOINT_URL", "COGNITO_USER_POOL_ID", "COGNITO_CLIENT_ID", "CORS_ORIGIN"):
    os.environ.pop(_name, None)

import boto3  # noqa: E402
import pytest  # noqa: E402
from moto import mock_aws  # noqa: E402

from core.dependencies import reset_dependencies  # noqa: E402

PHOTO_TABLE_NAME = os.environ["PHOTO_METADATA_TABLE_NAME"]
USER_TABLE_NAME = os.environ["USER_TABLE_NAME"]
BUCKET_NAME = os.environ["PHOTO_S3_BUCKET_NAME"]


@pytest.fixture(autouse=True)
def fresh_dependencies():
    """Every test starts with unread configuration and no cached clients."""
    reset_dependencies()
    yield
    reset_dependencies()


@pytest.fixture
def storage_only_mode(monkeypatch):
    """Run without a metadata table."""
    monkeypatch.delenv("PHOTO_METADATA_TABLE_NAME", raising=False)
    reset_dependencies()


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def photo_table(dynamodb_resource):
    """Photo metadata table keyed by owner, with its listing indexes."""
    table = dynamodb_resource.create_table(
        TableName=PHOTO_TABLE_NAME,
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[
            {"AttributeName": "owner_id", "KeyType": "HASH"},
            {"AttributeName": "photo_id", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "photo_id", "AttributeType": "S"},
            {"AttributeName": "owner_id", "AttributeType": "S"},
            {"AttributeName": "uploaded_at", "AttributeType": "S"},
            {"AttributeName": "visibility", "AttributeType": "S"},
        ],
        LocalSecondaryIndexes=[
            {
                "IndexName": "owner-uploaded-index",
                "KeySchema": [
                    {"AttributeName": "owner_id", "KeyType": "HASH"},
                    {"AttributeName": "uploaded_at", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
        GlobalSecondaryIndexes=[
            {
                "IndexName": "visibility-uploaded-index",
                "KeySchema": [
                    {"AttributeName": "visibility", "KeyType": "HASH"},
                    {"AttributeName": "uploaded_at", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
    )
    table.wait_until_exists()
    return table


@pytest.fixture(scope="function")
def user_table(dynamodb_resource):
    table = dynamodb_resource.create_table(
        TableName=USER_TABLE_NAME,
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "user_id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "user_id", "AttributeType": "S"}],
    )
    table.wait_until_exists()
    return table


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    s3_client.create_bucket(Bucket=BUCKET_NAME)
    return s3_client


@pytest.fixture
def bucket_keys(s3_bucket) -> Callable[[], list[str]]:
    """Return every key currently in the photo bucket."""

    def _keys() -> list[str]:
        response = s3_bucket.list_objects_v2(Bucket=BUCKET_NAME)
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _keys


@pytest.fixture
def photo_item() -> Callable[..., dict[str, Any]]:
    """Build a raw photo table item with sensible defaults."""

    def _item(photo_id: str, owner_id: str = "u1", **overrides: Any) -> dict[str, Any]:
        item: dict[str, Any] = {
            "photo_id": photo_id,
            "owner_id": owner_id,
            "storage_key": f"{owner_id}/1700000000000_{photo_id}.jpg",
            "original_name": f"{photo_id}.jpg",
            "url": f"https://{BUCKET_NAME}.s3.us-east-1.amazonaws.com/{owner_id}/{photo_id}.jpg",
            "size_bytes": 100,
            "mime_type": "image/jpeg",
            "is_public": False,
            "visibility": "private",
            "view_count": 0,
            "uploaded_at": "2024-01-01T00:00:00+00:00",
        }
        item.update(overrides)
        return item

    return _item


@pytest.fixture
def png_bytes() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    import base64

    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)


@pytest.fixture
def jpeg_bytes() -> bytes:
    return b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"
