"""Thin adapter for interacting with Amazon S3."""

from collections.abc import Iterator, Mapping
from typing import Any, Protocol

import boto3

from core.config import AppConfig
from core.utils.constants import S3_PAGE_SIZE


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def put_object(
        self,
        *,
        Bucket: str,
        Key: str,
        Body: bytes,
        ContentType: str,
        Metadata: Mapping[str, str],
    ) -> Any: ...

    def head_object(self, *, Bucket: str, Key: str) -> Mapping[str, Any]: ...

    def delete_object(self, *, Bucket: str, Key: str) -> Any: ...

    def get_paginator(self, operation_name: str) -> Any: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (repository-facing)."""

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None: ...

    def head_object(self, *, key: str) -> Mapping[str, Any]: ...

    def delete_object(self, *, key: str) -> None: ...

    def iter_objects(self, *, prefix: str | None = None) -> Iterator[Mapping[str, Any]]: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, config: AppConfig) -> None:
        """Create S3 client from the deployment configuration."""
        if not config.s3_bucket_name:
            raise RuntimeError("Photo bucket is not configured")

        self._bucket = config.s3_bucket_name
        self._client: _Boto3S3Client = boto3.client(
            "s3",
            endpoint_url=config.aws_endpoint_url,
            region_name=config.s3_region,
        )

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None:
        """Store object in S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            Metadata=metadata,
        )

    def head_object(self, *, key: str) -> Mapping[str, Any]:
        """Fetch object headers.
        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._client.head_object(Bucket=self._bucket, Key=key)

    def delete_object(self, *, key: str) -> None:
        """Delete object from S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.delete_object(
            Bucket=self._bucket,
            Key=key,
        )

    def iter_objects(self, *, prefix: str | None = None) -> Iterator[Mapping[str, Any]]:
        """Yield raw `Contents` entries page by page, following continuation tokens.
        Raises boto3 exceptions - caught by domain implementation.
        """
        params: dict[str, Any] = {
            "Bucket": self._bucket,
            "PaginationConfig": {"PageSize": S3_PAGE_SIZE},
        }
        if prefix:
            params["Prefix"] = prefix

        paginator = self._client.get_paginator("list_objects_v2")
        for page in paginator.paginate(**params):
            yield from page.get("Contents", [])
