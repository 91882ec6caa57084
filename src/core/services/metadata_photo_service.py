"""Photo flows for deployments with a metadata table."""

from typing import Any

from aws_lambda_powertools import Logger

from core.config import AppConfig
from core.filters.page_pagination import PagePagination
from core.models.identity import Identity
from core.models.photo import FileDescriptor, PhotoRecord, StoredObject
from core.repositories.metadata_repository import PhotoMetadataRepository
from core.repositories.storage_repository import PhotoStorageRepository
from core.services.photo_service import JsonDict, PhotoService

logger = Logger(UTC=True)


class MetadataPhotoService(PhotoService):
    """Records every upload and resolves photos through ownership-scoped lookups.

    Deletion removes the storage object before the record, so an
    interruption leaves an orphaned record (found by `reconcile_orphans`)
    rather than an unreferenced object.
    """

    mode = "metadata"

    def __init__(
        self,
        config: AppConfig,
        storage: PhotoStorageRepository,
        metadata: PhotoMetadataRepository,
    ) -> None:
        super().__init__(config, storage)
        self.metadata = metadata

    def _record_upload(self, identity: Identity, stored: StoredObject) -> FileDescriptor:
        record = self.metadata.create(
            owner_id=identity.subject_id,
            storage_key=stored.key,
            original_name=stored.original_name,
            url=stored.url,
            size_bytes=stored.size,
            mime_type=stored.mime_type or "",
        )

        return FileDescriptor(
            id=record.id,
            url=record.url,
            name=record.storage_key,
            size=record.size_bytes,
            type=record.mime_type,
            uploaded_at=record.uploaded_at,
        )

    def list_photos(self, identity: Identity, *, page: int, limit: int) -> JsonDict:
        records, total = self.metadata.list_by_owner(
            owner_id=identity.subject_id,
            limit=limit,
            offset=PagePagination.to_offset(page, limit),
        )
        return self._page_body(records, page=page, limit=limit, total=total)

    def list_public(self, *, page: int, limit: int) -> JsonDict:
        records, total = self.metadata.list_public(
            limit=limit,
            offset=PagePagination.to_offset(page, limit),
        )
        return self._page_body(records, page=page, limit=limit, total=total)

    def delete_photo(self, identity: Identity, photo_ref: str) -> None:
        record = self.metadata.find_owned(photo_id=photo_ref, owner_id=identity.subject_id)

        self.storage.delete(key=record.storage_key)
        # Not rolled back: a failure here leaves an orphaned record
        self.metadata.delete_by_id(photo_id=record.id, owner_id=record.owner_id)

        logger.info(
            "Photo deleted",
            extra={"photo_id": record.id, "owner_id": identity.subject_id},
        )

    def reconcile_orphans(self, owner_id: str, *, dry_run: bool = True) -> list[PhotoRecord]:
        """Find, and unless `dry_run` remove, records whose object is gone.

        Returns:
            The orphaned records that were found
        """
        orphans = [
            record
            for record in self.metadata.list_all_by_owner(owner_id=owner_id)
            if not self.storage.exists(key=record.storage_key)
        ]

        logger.info(
            "Orphaned photo records found",
            extra={"owner_id": owner_id, "count": len(orphans), "dry_run": dry_run},
        )

        if not dry_run:
            for record in orphans:
                self.metadata.delete_by_id(photo_id=record.id, owner_id=record.owner_id)

        return orphans

    @staticmethod
    def _page_body(
        records: list[PhotoRecord],
        *,
        page: int,
        limit: int,
        total: int,
    ) -> dict[str, Any]:
        pagination = PagePagination.get_page_info(page, limit, total)
        return {
            "photos": [record.to_response() for record in records],
            "pagination": pagination.model_dump(by_alias=True),
        }
