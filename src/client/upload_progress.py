"""Cancellable, non-blocking upload progress stream."""

from __future__ import annotations

import queue
import threading
from collections.abc import Callable, Iterator
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict

logger = Logger(service="gallery-client", UTC=True)

CHUNK_SIZE = 64 * 1024


class ProgressEvent(BaseModel):
    """Bytes of the request body handed to the transport so far."""

    model_config = ConfigDict(frozen=True)

    bytes_sent: int
    total_bytes: int

    @property
    def fraction(self) -> float:
        return self.bytes_sent / self.total_bytes if self.total_bytes else 1.0


class UploadFinished(BaseModel):
    """Terminal event carrying the server's response body."""

    model_config = ConfigDict(frozen=True)

    result: dict[str, Any]


class UploadCancelledError(Exception):
    """Raised from the stream after `UploadProgress.cancel()`."""


class ProgressBody:
    """File-like request body that reports each chunk as it is read.

    `requests` sizes the body with `len()` and the transport pulls it
    through `read()`, so reads track what has been sent.
    """

    def __init__(
        self,
        data: bytes,
        *,
        on_progress: Callable[[int, int], None],
        cancelled: threading.Event,
        chunk_size: int = CHUNK_SIZE,
    ) -> None:
        self._data = data
        self._offset = 0
        self._on_progress = on_progress
        self._cancelled = cancelled
        self._chunk_size = chunk_size

    def __len__(self) -> int:
        return len(self._data)

    def read(self, size: int = -1) -> bytes:
        if self._cancelled.is_set():
            raise UploadCancelledError("Upload cancelled")

        if size is None or size < 0 or size > self._chunk_size:
            size = self._chunk_size

        chunk = self._data[self._offset : self._offset + size]
        self._offset += len(chunk)

        if chunk:
            self._on_progress(self._offset, len(self._data))

        return chunk


class UploadProgress:
    """Runs one upload on a worker thread and exposes it as an event stream.

    Iterating yields `ProgressEvent`s in order and ends with a single
    `UploadFinished`; a failed upload raises its exception from the
    iterator instead. The consumer is never blocked by the network, only
    by waiting for the next event.

    Example:
        progress = client.stream_upload(files)
        for event in progress:
            if isinstance(event, ProgressEvent):
                bar.update(event.fraction)
    """

    _DONE = object()

    def __init__(self, body: bytes, send: Callable[[ProgressBody], dict[str, Any]]) -> None:
        self._events: queue.Queue[Any] = queue.Queue()
        self._cancelled = threading.Event()
        self._send = send
        self._body = ProgressBody(
            body,
            on_progress=self._report,
            cancelled=self._cancelled,
        )
        self._thread = threading.Thread(target=self._run, name="gallery-upload", daemon=True)
        self._started = False
        self._finished = False

    @property
    def total_bytes(self) -> int:
        return len(self._body)

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def start(self) -> UploadProgress:
        if not self._started:
            self._started = True
            self._thread.start()
        return self

    def cancel(self) -> None:
        """Abort the body stream at the next chunk boundary."""
        self._cancelled.set()

    def _report(self, bytes_sent: int, total_bytes: int) -> None:
        self._events.put(ProgressEvent(bytes_sent=bytes_sent, total_bytes=total_bytes))

    def _run(self) -> None:
        try:
            result = self._send(self._body)
        except Exception as exc:
            if self._cancelled.is_set():
                logger.info("Upload cancelled")
                self._events.put(UploadCancelledError("Upload cancelled"))
            else:
                self._events.put(exc)
            return

        if self._cancelled.is_set():
            self._events.put(UploadCancelledError("Upload cancelled"))
        else:
            self._events.put(UploadFinished(result=result))

    def __iter__(self) -> Iterator[ProgressEvent | UploadFinished]:
        if self._finished:
            return

        self.start()

        while True:
            item = self._events.get()

            if isinstance(item, ProgressEvent):
                yield item
                continue

            self._finished = True

            if isinstance(item, UploadFinished):
                yield item
                return

            raise item

    def result(self) -> dict[str, Any]:
        """Block until the upload ends and return the server's response body."""
        for event in self:
            if isinstance(event, UploadFinished):
                return event.result

        raise RuntimeError("Upload stream already consumed")
