"""Photo flows for deployments without a metadata table."""

from aws_lambda_powertools import Logger

from core.models.errors import MetadataStoreUnavailableError, NotOwnedError
from core.models.identity import Identity
from core.models.photo import FileDescriptor, StoredObject
from core.services.photo_service import JsonDict, PhotoService
from core.utils.constants import DEFAULT_LIST_MAX_KEYS

logger = Logger(UTC=True)


class StorageOnlyPhotoService(PhotoService):
    """The storage key is the photo identity; ownership is the key prefix."""

    mode = "storage"

    def _record_upload(self, identity: Identity, stored: StoredObject) -> FileDescriptor:
        return FileDescriptor(
            id=stored.key,
            url=stored.url,
            name=stored.key,
            size=stored.size,
            type=stored.mime_type or "",
            uploaded_at=stored.last_modified,
        )

    def list_photos(self, identity: Identity, *, page: int, limit: int) -> JsonDict:
        # The bucket listing is returned whole; page/limit only apply to records
        photos = [
            stored.to_response()
            for stored in self.storage.list(
                prefix=identity.key_prefix,
                max_keys=DEFAULT_LIST_MAX_KEYS,
            )
        ]
        return {"photos": photos}

    def list_public(self, *, page: int, limit: int) -> JsonDict:
        raise MetadataStoreUnavailableError(
            message="Public photos require a metadata store",
        )

    def delete_photo(self, identity: Identity, photo_ref: str) -> None:
        if not photo_ref.startswith(identity.key_prefix):
            logger.warning(
                "Delete outside caller prefix refused",
                extra={"key": photo_ref, "owner_id": identity.subject_id},
            )
            raise NotOwnedError(
                message="Access denied",
                details={"key": photo_ref},
            )

        self.storage.delete(key=photo_ref)
        logger.info("Photo deleted", extra={"key": photo_ref, "owner_id": identity.subject_id})
