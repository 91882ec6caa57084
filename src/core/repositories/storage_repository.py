"""Abstract contract for photo file storage."""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from core.models.photo import StoredObject, UploadFile
from core.utils.constants import DEFAULT_LIST_MAX_KEYS


class PhotoStorageRepository(ABC):
    """Contract for storing, listing and removing photo files.

    Implementations could be S3, GCS, local disk, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def validate(self, upload: UploadFile) -> None:
        """Check an upload against the storage constraints without any I/O.

        Raises:
            UnsupportedMediaTypeError: If the MIME type is not an image type
            PayloadTooLargeError: If the file exceeds the size ceiling
            NoFileProvidedError: If the file is empty
        """

    @abstractmethod
    def put(self, upload: UploadFile, *, key_prefix: str = "") -> StoredObject:
        """Validate and store a file under `key_prefix + millis + "_" + name`.

        Args:
            upload: File to store
            key_prefix: Per-user namespace (may be empty)

        Returns:
            The stored object

        Raises:
            ValidationError: If the file fails `validate`
            StorageError: If the write fails
        """

    @abstractmethod
    def list(
        self,
        *,
        prefix: str | None = None,
        max_keys: int = DEFAULT_LIST_MAX_KEYS,
    ) -> Iterator[StoredObject]:
        """Lazily iterate stored objects, optionally restricted to a prefix.

        Every yielded key starts with `prefix` when one is given.

        Raises:
            StorageError: If listing fails
        """

    @abstractmethod
    def delete(self, *, key: str) -> None:
        """Delete an object by key. Deleting a missing key is not an error.

        Raises:
            StorageError: If deletion fails
        """

    @abstractmethod
    def exists(self, *, key: str) -> bool:
        """Return whether an object exists under `key`.

        Raises:
            StorageError: If the lookup fails for a reason other than absence
        """
