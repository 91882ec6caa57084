"""Upload, list and delete flows shared by both deployment modes.

A deployment runs exactly one `PhotoService` implementation, chosen once
at start-up from the configuration:

- `MetadataPhotoService` when a metadata table is configured
- `StorageOnlyPhotoService` otherwise
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from aws_lambda_powertools import Logger

from core.config import AppConfig
from core.models.errors import NoFileProvidedError
from core.models.identity import Identity
from core.models.photo import FileDescriptor, StoredObject, UploadFile
from core.repositories.storage_repository import PhotoStorageRepository

JsonDict = dict[str, Any]

logger = Logger(UTC=True)


class PhotoService(ABC):
    """Request flows for one deployment mode."""

    mode: ClassVar[str]

    def __init__(self, config: AppConfig, storage: PhotoStorageRepository) -> None:
        self.config = config
        self.storage = storage

    def upload(self, identity: Identity, uploads: list[UploadFile]) -> list[FileDescriptor]:
        """Store a batch of files for `identity`, in submission order.

        The flow is:
        1. Validate every file (one bad file rejects the batch before any write)
        2. Put each file to storage under the caller's key prefix
        3. Record each stored file (mode specific)

        Files stored before a mid-batch infrastructure failure are kept.

        Raises:
            NoFileProvidedError: If the batch is empty
            ValidationError: If any file fails validation
            StorageError: If a write fails
            MetadataStoreError: If recording a file fails
        """
        if not uploads:
            raise NoFileProvidedError(message="No file uploaded")

        for upload in uploads:
            self.storage.validate(upload)

        logger.debug(
            "Starting photo upload",
            extra={"owner_id": identity.subject_id, "file_count": len(uploads)},
        )

        descriptors: list[FileDescriptor] = []
        for upload in uploads:
            stored = self.storage.put(upload, key_prefix=identity.key_prefix)
            descriptors.append(self._record_upload(identity, stored))

        logger.info(
            "Photos uploaded successfully",
            extra={"owner_id": identity.subject_id, "file_count": len(descriptors)},
        )
        return descriptors

    @abstractmethod
    def _record_upload(self, identity: Identity, stored: StoredObject) -> FileDescriptor:
        """Describe (and, where applicable, persist) one stored file."""

    @abstractmethod
    def list_photos(self, identity: Identity, *, page: int, limit: int) -> JsonDict:
        """Return the caller's photos as a `{photos, pagination?}` body."""

    @abstractmethod
    def delete_photo(self, identity: Identity, photo_ref: str) -> None:
        """Delete one of the caller's photos by record id or storage key.

        Raises:
            NotFoundError: If the record does not exist for this caller
            NotOwnedError: If the storage key is outside the caller's prefix
            StorageError: If the storage delete fails
            MetadataStoreError: If the record delete fails
        """

    @abstractmethod
    def list_public(self, *, page: int, limit: int) -> JsonDict:
        """Return public photos as a `{photos, pagination}` body."""
