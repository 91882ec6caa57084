"""Abstract contract for photo metadata persistence."""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from core.models.photo import PhotoRecord


class PhotoMetadataRepository(ABC):
    """Contract for storing and retrieving photo records.

    Implementations could be DynamoDB, PostgreSQL, MongoDB, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
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
        """Persist a new, private photo record.

        Raises:
            MetadataStoreError: If creation fails
        """

    @abstractmethod
    def list_by_owner(
        self,
        *,
        owner_id: str,
        limit: int,
        offset: int,
    ) -> tuple[list[PhotoRecord], int]:
        """Return one page of an owner's records, newest first, and the full count.

        Raises:
            MetadataStoreError: If the query fails
        """

    @abstractmethod
    def list_all_by_owner(self, *, owner_id: str) -> Iterator[PhotoRecord]:
        """Iterate every record of an owner, newest first.

        Raises:
            MetadataStoreError: If the query fails
        """

    @abstractmethod
    def find_owned(self, *, photo_id: str, owner_id: str) -> PhotoRecord:
        """Fetch a record only if it belongs to `owner_id`.

        Raises:
            NotFoundError: If no such record exists for this owner
            MetadataStoreError: If the lookup fails
        """

    @abstractmethod
    def delete_by_id(self, *, photo_id: str, owner_id: str) -> None:
        """Remove one of `owner_id`'s records.

        Raises:
            MetadataStoreError: If deletion fails
        """

    @abstractmethod
    def list_public(self, *, limit: int, offset: int) -> tuple[list[PhotoRecord], int]:
        """Return one page of public records, newest first, and the full count.

        Raises:
            MetadataStoreError: If the query fails
        """
