"""Gallery view state, independent of any rendering toolkit."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import requests
from aws_lambda_powertools import Logger

from client.gallery_client import GalleryClient, GalleryClientError, LocalFile
from client.upload_progress import ProgressEvent, UploadCancelledError, UploadFinished

logger = Logger(service="gallery-client", UTC=True)

Photo = dict[str, Any]

NETWORK_ERROR_MESSAGE = "Unable to reach the server"


def photo_ref(photo: Photo) -> str:
    """Identifier the delete route expects: record id, else storage key."""
    return str(photo.get("id") or photo["key"])


class Gallery:
    """Holds what a gallery screen shows and keeps it in step with the server.

    Successful uploads and deletes trigger a refresh. A delete removes the
    photo locally first and puts it back if the server refuses.
    Failures end up in `status` rather than escaping to the view.
    """

    def __init__(self, client: GalleryClient, *, limit: int = 20) -> None:
        self.client = client
        self.limit = limit
        self.page = 1
        self.photos: list[Photo] = []
        self.pagination: dict[str, Any] | None = None
        self.status = ""
        self.progress = 0.0
        self.uploading = False

    def refresh(self, page: int | None = None) -> bool:
        if page is not None:
            self.page = page

        try:
            body = self.client.list_photos(page=self.page, limit=self.limit)
        except GalleryClientError as exc:
            self.status = exc.message
            return False
        except requests.RequestException:
            logger.warning("Gallery refresh failed", exc_info=True)
            self.status = NETWORK_ERROR_MESSAGE
            return False

        self.photos = list(body.get("photos") or [])
        self.pagination = body.get("pagination")
        return True

    def upload(self, files: Sequence[LocalFile]) -> bool:
        """Upload a batch, tracking progress in `progress` (0.0 to 1.0)."""
        self.uploading = True
        self.progress = 0.0

        try:
            for event in self.client.stream_upload(files):
                if isinstance(event, ProgressEvent):
                    self.progress = event.fraction
                elif isinstance(event, UploadFinished):
                    self.status = event.result.get("message", "Upload complete")
        except UploadCancelledError:
            self.status = "Upload cancelled"
            return False
        except GalleryClientError as exc:
            self.status = exc.message
            return False
        except requests.RequestException:
            logger.warning("Upload failed", exc_info=True)
            self.status = NETWORK_ERROR_MESSAGE
            return False
        finally:
            self.uploading = False

        self.progress = 1.0
        self.refresh()
        return True

    def delete(self, ref: str) -> bool:
        index = next(
            (i for i, photo in enumerate(self.photos) if photo_ref(photo) == ref),
            None,
        )
        removed = self.photos.pop(index) if index is not None else None

        try:
            self.client.delete_photo(ref)
        except (GalleryClientError, requests.RequestException) as exc:
            if removed is not None and index is not None:
                self.photos.insert(index, removed)
            logger.warning("Delete failed, photo restored", extra={"ref": ref})
            self.status = (
                exc.message if isinstance(exc, GalleryClientError) else NETWORK_ERROR_MESSAGE
            )
            return False

        self.status = "Photo deleted successfully"
        self.refresh()
        return True
