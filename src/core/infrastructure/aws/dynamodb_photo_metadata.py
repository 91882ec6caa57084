"""DynamoDB-backed implementation of PhotoMetadataRepository."""

import uuid
from collections.abc import Iterator
from typing import Any

from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import ConditionBase, Key
from botocore.exceptions import ClientError

from core.config import AppConfig
from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import MetadataStoreError, NotFoundError
from core.models.photo import PhotoRecord
from core.repositories.metadata_repository import PhotoMetadataRepository
from core.utils.constants import (
    ERROR_CODE_METADATA_CREATE_FAILED,
    ERROR_CODE_METADATA_DELETE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_LIST_FAILED,
    OWNER_UPLOADED_INDEX,
    PHOTO_ID_PREFIX,
    VISIBILITY_PUBLIC,
    VISIBILITY_UPLOADED_INDEX,
)
from core.utils.time import utc_now_iso

Item = dict[str, Any]

logger = Logger(UTC=True)


class DynamoDBPhotoMetadata(PhotoMetadataRepository):
    """DynamoDB-backed photo records with error handling.

    All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.

    Table layout:
    - partition key `owner_id`, sort key `photo_id`
    - `owner-uploaded-index` LSI (owner_id, uploaded_at) for newest-first listing
    - `visibility-uploaded-index` GSI (visibility, uploaded_at) for the public feed

    Everything scoped to one owner reads strongly consistent, so a photo
    is visible to its owner as soon as `create` returns. The public feed
    goes through a GSI and is eventually consistent.
    """

    def __init__(
        self,
        config: AppConfig,
        adapter: DynamoDBAdapterProtocol | None = None,
    ) -> None:
        """Initialize with DynamoDB adapter."""
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter(
            config, config.metadata_table_name
        )

    @staticmethod
    def generate_photo_id() -> str:
        """Generate a unique photo identifier."""
        return f"{PHOTO_ID_PREFIX}{uuid.uuid4().hex}"

    def create(
        self,
        *,
        owner_id: str,
        storage_key: str,
        original_name: str,
        url: str,
        size_bytes: int,
        mime_type: str,
    ) -> PhotoRecord:
        record = PhotoRecord(
            id=self.generate_photo_id(),
            owner_id=owner_id,
            storage_key=storage_key,
            original_name=original_name,
            url=url,
            size_bytes=size_bytes,
            mime_type=mime_type,
            uploaded_at=utc_now_iso(),
        )

        logger.debug(
            "Creating photo record",
            extra={"photo_id": record.id, "owner_id": owner_id, "storage_key": storage_key},
        )

        try:
            self._db.put_item(
                item=record.to_item(),
                condition_expression="attribute_not_exists(photo_id)",
            )
        except ClientError as exc:
            logger.error(
                "DynamoDB put_item failed",
                extra={"photo_id": record.id, "owner_id": owner_id},
            )
            raise MetadataStoreError(
                message="Unable to save photo metadata at this time",
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={"photo_id": record.id},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error creating photo record")
            raise MetadataStoreError(
                message="Unable to save photo metadata at this time",
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={"photo_id": record.id},
            ) from exc

        logger.info("Photo record created", extra={"photo_id": record.id, "owner_id": owner_id})
        return record

    def list_by_owner(
        self,
        *,
        owner_id: str,
        limit: int,
        offset: int,
    ) -> tuple[list[PhotoRecord], int]:
        logger.debug(
            "Listing owner photos",
            extra={"owner_id": owner_id, "limit": limit, "offset": offset},
        )
        return self._page(
            index_name=OWNER_UPLOADED_INDEX,
            key_condition=Key("owner_id").eq(owner_id),
            limit=limit,
            offset=offset,
            context={"owner_id": owner_id},
            consistent=True,
        )

    def list_all_by_owner(self, *, owner_id: str) -> Iterator[PhotoRecord]:
        for item in self._iter_items(
            index_name=OWNER_UPLOADED_INDEX,
            key_condition=Key("owner_id").eq(owner_id),
            context={"owner_id": owner_id},
            consistent=True,
        ):
            yield PhotoRecord.from_item(item)

    def list_public(self, *, limit: int, offset: int) -> tuple[list[PhotoRecord], int]:
        logger.debug("Listing public photos", extra={"limit": limit, "offset": offset})
        return self._page(
            index_name=VISIBILITY_UPLOADED_INDEX,
            key_condition=Key("visibility").eq(VISIBILITY_PUBLIC),
            limit=limit,
            offset=offset,
            context={"visibility": VISIBILITY_PUBLIC},
        )

    def find_owned(self, *, photo_id: str, owner_id: str) -> PhotoRecord:
        """Look the record up by its full key so foreign ids are invisible."""
        logger.debug("Fetching owned photo", extra={"photo_id": photo_id, "owner_id": owner_id})

        try:
            response = self._db.get_item(
                key={"owner_id": owner_id, "photo_id": photo_id},
                consistent_read=True,
            )
        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"photo_id": photo_id})
            raise MetadataStoreError(
                message="Unable to retrieve photo metadata",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"photo_id": photo_id},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error fetching photo record")
            raise MetadataStoreError(
                message="Unable to retrieve photo metadata",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"photo_id": photo_id},
            ) from exc

        item = response.get("Item")
        if not item:
            raise NotFoundError(
                message="Photo not found or access denied",
                details={"photo_id": photo_id},
            )

        return PhotoRecord.from_item(item)

    def delete_by_id(self, *, photo_id: str, owner_id: str) -> None:
        logger.debug("Removing photo record", extra={"photo_id": photo_id, "owner_id": owner_id})

        try:
            self._db.delete_item(key={"owner_id": owner_id, "photo_id": photo_id})
            logger.info("Photo record removed", extra={"photo_id": photo_id})

        except ClientError as exc:
            logger.error("DynamoDB delete_item failed", extra={"photo_id": photo_id})
            raise MetadataStoreError(
                message="Unable to delete photo metadata",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"photo_id": photo_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error removing photo record")
            raise MetadataStoreError(
                message="Unable to delete photo metadata",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"photo_id": photo_id},
            ) from exc

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------

    def _page(
        self,
        *,
        index_name: str,
        key_condition: ConditionBase,
        limit: int,
        offset: int,
        context: dict[str, Any],
        consistent: bool = False,
    ) -> tuple[list[PhotoRecord], int]:
        """Return items [offset, offset + limit) of a newest-first query plus its full count."""
        total = self._count(
            index_name=index_name,
            key_condition=key_condition,
            context=context,
            consistent=consistent,
        )

        wanted = offset + limit
        items: list[Item] = []

        if offset < total:
            for item in self._iter_items(
                index_name=index_name,
                key_condition=key_condition,
                context=context,
                consistent=consistent,
                page_size=wanted,
            ):
                items.append(item)
                if len(items) >= wanted:
                    break

        records = [PhotoRecord.from_item(item) for item in items[offset:wanted]]

        logger.info(
            "Photo records listed",
            extra={**context, "count": len(records), "total": total},
        )

        return records, total

    def _count(
        self,
        *,
        index_name: str,
        key_condition: ConditionBase,
        context: dict[str, Any],
        consistent: bool = False,
    ) -> int:
        query_kwargs: dict[str, Any] = {
            "IndexName": index_name,
            "KeyConditionExpression": key_condition,
            "Select": "COUNT",
        }
        if consistent:
            query_kwargs["ConsistentRead"] = True

        total = 0
        last_evaluated_key: dict[str, Any] | None = None

        try:
            while True:
                if last_evaluated_key:
                    query_kwargs["ExclusiveStartKey"] = last_evaluated_key

                response = self._db.query(**query_kwargs)
                total += int(response.get("Count", 0))

                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    return total

        except ClientError as exc:
            logger.error("DynamoDB count query failed", extra=context)
            raise MetadataStoreError(
                message="Unable to list photos",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
                details=context,
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error counting photos")
            raise MetadataStoreError(
                message="Unable to list photos",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
                details=context,
            ) from exc

    def _iter_items(
        self,
        *,
        index_name: str,
        key_condition: ConditionBase,
        context: dict[str, Any],
        page_size: int | None = None,
        consistent: bool = False,
    ) -> Iterator[Item]:
        query_kwargs: dict[str, Any] = {
            "IndexName": index_name,
            "KeyConditionExpression": key_condition,
            "ScanIndexForward": False,
        }
        if consistent:
            query_kwargs["ConsistentRead"] = True
        if page_size:
            query_kwargs["Limit"] = page_size

        last_evaluated_key: dict[str, Any] | None = None

        try:
            while True:
                if last_evaluated_key:
                    query_kwargs["ExclusiveStartKey"] = last_evaluated_key

                response = self._db.query(**query_kwargs)
                page_items = response.get("Items", [])

                if not isinstance(page_items, list):
                    raise MetadataStoreError(
                        message="Invalid query response from DynamoDB",
                        error_code=ERROR_CODE_METADATA_LIST_FAILED,
                        details=context,
                    )

                yield from page_items

                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    return

        except MetadataStoreError:
            raise
        except ClientError as exc:
            logger.error("DynamoDB query failed", extra=context)
            raise MetadataStoreError(
                message="Unable to list photos",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
                details=context,
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error listing photos")
            raise MetadataStoreError(
                message="Unable to list photos",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
                details=context,
            ) from exc
