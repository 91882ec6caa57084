"""S3-backed implementation of PhotoStorageRepository."""

from collections.abc import Iterator, Mapping
from datetime import datetime
from typing import Any
from urllib.parse import quote

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.config import AppConfig
from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import (
    NoFileProvidedError,
    PayloadTooLargeError,
    StorageError,
    UnsupportedMediaTypeError,
)
from core.models.photo import StoredObject, UploadFile
from core.repositories.storage_repository import PhotoStorageRepository
from core.utils.constants import (
    DEFAULT_LIST_MAX_KEYS,
    ERROR_CODE_PHOTO_DELETE_FAILED,
    ERROR_CODE_PHOTO_HEAD_FAILED,
    ERROR_CODE_PHOTO_LIST_FAILED,
    ERROR_CODE_PHOTO_UPLOAD_FAILED,
    IMAGE_MIME_PREFIX,
    KEY_TIMESTAMP_SEPARATOR,
    MAX_FILE_SIZE,
    get_max_file_size_mb,
)
from core.utils.time import epoch_millis, millis_to_iso, utc_now_iso

logger = Logger(UTC=True)


def safe_file_name(filename: str) -> str:
    """Strip any client-side directory components from an upload name."""
    return filename.replace("\\", "/").rsplit("/", 1)[-1].strip()


def build_storage_key(*, key_prefix: str, millis: int, original_name: str) -> str:
    return f"{key_prefix}{millis}{KEY_TIMESTAMP_SEPARATOR}{original_name}"


def parse_storage_key(key: str, prefix: str | None = None) -> tuple[int | None, str]:
    """Split `{prefix}{millis}_{name}` into its timestamp and file name.

    Keys that do not follow the convention come back as `(None, remainder)`.
    """
    remainder = key[len(prefix):] if prefix and key.startswith(prefix) else key
    stamp, sep, name = remainder.partition(KEY_TIMESTAMP_SEPARATOR)

    if sep and stamp.isdigit() and name:
        return int(stamp), name

    return None, remainder


class S3PhotoStorage(PhotoStorageRepository):
    """Photo storage implementation backed by Amazon S3."""

    def __init__(self, config: AppConfig, adapter: S3AdapterProtocol | None = None) -> None:
        """Create storage using the provided S3 adapter."""
        self._config = config
        self._s3: S3AdapterProtocol = adapter or S3Adapter(config)

    def validate(self, upload: UploadFile) -> None:
        """Check type and size before anything touches the network."""
        if not upload.mime_type.startswith(IMAGE_MIME_PREFIX):
            raise UnsupportedMediaTypeError(
                message="Only image files are allowed!",
                details={"filename": upload.filename, "mime_type": upload.mime_type},
            )

        if upload.size_bytes == 0:
            raise NoFileProvidedError(
                message="Uploaded file is empty",
                details={"filename": upload.filename},
            )

        if upload.size_bytes > MAX_FILE_SIZE:
            raise PayloadTooLargeError(
                message=f"File too large. Maximum size is {get_max_file_size_mb()}MB",
                details={"filename": upload.filename, "size": upload.size_bytes},
            )

        if not safe_file_name(upload.filename):
            raise NoFileProvidedError(
                message="Uploaded file has no name",
                details={"filename": upload.filename},
            )

    def put(self, upload: UploadFile, *, key_prefix: str = "") -> StoredObject:
        """Upload photo bytes to S3 and return the stored object."""
        self.validate(upload)

        original_name = safe_file_name(upload.filename)
        # Read per call so each file in a batch gets its own timestamp
        key = build_storage_key(
            key_prefix=key_prefix,
            millis=epoch_millis(),
            original_name=original_name,
        )

        logger.debug(
            "Uploading photo",
            extra={"key": key, "size": upload.size_bytes, "mime_type": upload.mime_type},
        )

        try:
            self._s3.put_object(
                key=key,
                body=upload.content,
                content_type=upload.mime_type,
                # S3 user metadata must be ASCII
                metadata={"original-name": quote(original_name)},
            )
        except ClientError as exc:
            logger.error("S3 upload failed", extra={"key": key})
            raise StorageError(
                message="Unable to upload photo at this time",
                error_code=ERROR_CODE_PHOTO_UPLOAD_FAILED,
                details={"key": key},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error uploading photo")
            raise StorageError(
                message="Unable to upload photo at this time",
                error_code=ERROR_CODE_PHOTO_UPLOAD_FAILED,
                details={"key": key},
            ) from exc

        logger.info("Photo uploaded successfully", extra={"key": key})

        return StoredObject(
            key=key,
            url=self._config.object_url(key),
            size=upload.size_bytes,
            last_modified=utc_now_iso(),
            original_name=original_name,
            mime_type=upload.mime_type,
        )

    def list(
        self,
        *,
        prefix: str | None = None,
        max_keys: int = DEFAULT_LIST_MAX_KEYS,
    ) -> Iterator[StoredObject]:
        """Lazily yield stored objects under `prefix`, at most `max_keys` of them."""
        logger.debug("Listing photos", extra={"prefix": prefix, "max_keys": max_keys})

        if max_keys < 1:
            return

        returned = 0

        try:
            for entry in self._s3.iter_objects(prefix=prefix):
                key = entry.get("Key")

                # Provider prefix filtering is not trusted across pagination
                if not isinstance(key, str) or (prefix and not key.startswith(prefix)):
                    continue

                yield self._to_stored_object(entry, key=key, prefix=prefix)

                returned += 1
                if returned >= max_keys:
                    return

        except ClientError as exc:
            logger.error("S3 listing failed", extra={"prefix": prefix})
            raise StorageError(
                message="Unable to list photos at this time",
                error_code=ERROR_CODE_PHOTO_LIST_FAILED,
                details={"prefix": prefix},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error listing photos")
            raise StorageError(
                message="Unable to list photos at this time",
                error_code=ERROR_CODE_PHOTO_LIST_FAILED,
                details={"prefix": prefix},
            ) from exc

    def delete(self, *, key: str) -> None:
        """Delete a photo object from S3. S3 treats missing keys as success."""
        logger.debug("Deleting photo", extra={"key": key})

        try:
            self._s3.delete_object(key=key)
            logger.info("Photo deleted successfully", extra={"key": key})

        except ClientError as exc:
            logger.error("S3 deletion failed", extra={"key": key})
            raise StorageError(
                message="Unable to delete photo at this time",
                error_code=ERROR_CODE_PHOTO_DELETE_FAILED,
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting photo")
            raise StorageError(
                message="Unable to delete photo at this time",
                error_code=ERROR_CODE_PHOTO_DELETE_FAILED,
                details={"key": key},
            ) from exc

    def exists(self, *, key: str) -> bool:
        try:
            self._s3.head_object(key=key)
            return True

        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code"))
            if code in ("404", "NoSuchKey", "NotFound"):
                return False

            logger.error("S3 head_object failed", extra={"key": key})
            raise StorageError(
                message="Unable to check photo at this time",
                error_code=ERROR_CODE_PHOTO_HEAD_FAILED,
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error checking photo")
            raise StorageError(
                message="Unable to check photo at this time",
                error_code=ERROR_CODE_PHOTO_HEAD_FAILED,
                details={"key": key},
            ) from exc

    def _to_stored_object(
        self,
        entry: Mapping[str, Any],
        *,
        key: str,
        prefix: str | None,
    ) -> StoredObject:
        stamp, original_name = parse_storage_key(key, prefix)
        last_modified = entry.get("LastModified")

        if isinstance(last_modified, datetime):
            modified_iso = last_modified.isoformat()
        elif stamp is not None:
            modified_iso = millis_to_iso(stamp)
        else:
            modified_iso = str(last_modified or "")

        return StoredObject(
            key=key,
            url=self._config.object_url(key),
            size=int(entry.get("Size", 0)),
            last_modified=modified_iso,
            original_name=original_name,
        )
