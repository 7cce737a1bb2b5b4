"""
UploadedFile - a single file received with a request.

States:
  - pending: the contents can be read with get_stream() or moved once
  - moved: the contents live at the move target; get_stream() and
    move_to() raise ResourceConsumedError on every call
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil

import anyio.to_thread
from typing_extensions import override

from ..enums import UploadError
from ..errors import InvalidArgumentError, ResourceConsumedError, UploadTransferError
from ..interfaces import StreamInterface, UploadedFileInterface
from ..stream import Stream


logger = logging.getLogger(__name__)


class UploadedFile(UploadedFileInterface):
    """
    An uploaded file backed either by a path on disk or by a stream.

    A path-backed file is moved with ``shutil.move``. A stream-backed file
    is copied to the target in ``chunk_size`` pieces and its stream closed.
    Either way nothing of the original is left behind after a successful move.
    """

    chunk_size: int = 64 * 1024

    def __init__(
        self,
        source: StreamInterface | str | os.PathLike[str],
        *,
        size: int | None = None,
        error: UploadError | int | None = None,
        client_filename: str | None = None,
        client_media_type: str | None = None,
    ):
        self._file: str | None = None
        self._stream: StreamInterface | None = None
        if isinstance(source, StreamInterface):
            self._stream = source
        elif isinstance(source, (str, os.PathLike)):
            self._file = os.fspath(source)
            if not self._file:
                raise InvalidArgumentError("Uploaded file path must not be empty")
        else:
            raise InvalidArgumentError(
                f"Uploaded file source must be a stream or a path, got {type(source).__name__}"
            )

        if size is not None and (isinstance(size, bool) or not isinstance(size, int) or size < 0):
            raise InvalidArgumentError(f"Invalid uploaded file size: {size!r}")
        self._size = size
        self._error = _filter_error(error)
        self._client_filename = client_filename
        self._client_media_type = client_media_type
        self._moved = False

    def __repr__(self) -> str:
        state = "moved" if self._moved else "pending"
        return f"<UploadedFile {self._client_filename!r} {state}>"

    @property
    @override
    def size(self) -> int | None:
        return self._size

    @property
    @override
    def error(self) -> UploadError | None:
        return self._error

    @property
    @override
    def client_filename(self) -> str | None:
        return self._client_filename

    @property
    @override
    def client_media_type(self) -> str | None:
        return self._client_media_type

    @property
    def moved(self) -> bool:
        return self._moved

    def _ensure_available(self) -> None:
        if self._moved:
            raise ResourceConsumedError("Uploaded file has already been moved")
        if self._error is not None:
            raise UploadTransferError(f"Uploaded file is unavailable due to upload error {self._error.name}")

    @override
    def get_stream(self) -> StreamInterface:
        """Return the file contents. Repeated calls return the same stream."""
        self._ensure_available()
        if self._stream is None:
            assert self._file is not None
            self._stream = Stream.open(self._file, "rb")
        return self._stream

    @override
    def move_to(self, target_path: str | os.PathLike[str]) -> None:
        """
        Move the file to ``target_path``.

        Raises InvalidArgumentError for an empty or non-path target,
        ResourceConsumedError if already moved and UploadTransferError if
        the upload failed or the transfer hits an I/O error. A failed
        transfer leaves the file pending.
        """
        self._ensure_available()
        target = _filter_target(target_path)

        if self._file is not None:
            self._move_file(self._file, target)
        else:
            assert self._stream is not None
            self._copy_stream(self._stream, target)

        self._moved = True
        logger.debug("Moved uploaded file %r to %s", self._client_filename, target)

    async def amove_to(self, target_path: str | os.PathLike[str]) -> None:
        """Run ``move_to`` in a worker thread."""
        await anyio.to_thread.run_sync(self.move_to, target_path)

    def _move_file(self, source: str, target: str) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None
        try:
            shutil.move(source, target)
        except OSError as e:
            raise UploadTransferError(f"Unable to move {source!r} to {target!r}: {e}") from e

    def _copy_stream(self, stream: StreamInterface, target: str) -> None:
        created = False
        try:
            if stream.is_seekable():
                stream.rewind()
            with open(target, "wb") as out:
                created = True
                while True:
                    chunk = stream.read(self.chunk_size)
                    if not chunk:
                        break
                    out.write(chunk)
        except (OSError, RuntimeError) as e:
            if created:
                with contextlib.suppress(OSError):
                    os.remove(target)
            raise UploadTransferError(f"Unable to write uploaded file to {target!r}: {e}") from e
        stream.close()


def _filter_error(error: UploadError | int | None) -> UploadError | None:
    if error is None:
        return None
    if isinstance(error, bool) or not isinstance(error, int):
        raise InvalidArgumentError(f"Upload error must be an UploadError, got {error!r}")
    if error == 0:
        return None
    try:
        return UploadError(error)
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown upload error code: {error}") from e


def _filter_target(target_path: str | os.PathLike[str]) -> str:
    if not isinstance(target_path, (str, os.PathLike)):
        raise InvalidArgumentError(f"Target path must be a path, got {type(target_path).__name__}")
    target = os.fspath(target_path)
    if not isinstance(target, str) or not target or "\x00" in target:
        raise InvalidArgumentError(f"Invalid target path: {target!r}")
    return target
