"""
Asynchronous photo loading.

Fetching and decoding a photo is the only step that may wait on I/O, so it
runs on a small thread pool and hands back a ``Future``. The decoded photo
is fed into the session only once the future has completed, on the caller's
thread, which keeps the recompute itself free of threading concerns.

When photos are requested in quick succession only the most recent request
is delivered; older results are discarded.

Example:
    >>> loader = PhotoLoader()
    >>> future = loader.load_async(Path("photo.jpg"))
    >>> loader.deliver(session, future)   # after future.done()
"""

from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Optional, Union
import logging

from IF_Libs.constants import PHOTO_LOADER_MAX_WORKERS
from IF_Libs.errors import InstaFilterError, SourceLoadFailed
from IF_Libs.ImageEditingLib.image_io import decode_image_bytes
from IF_Libs.ImageEditingLib.image_models import PhotoRecord

logger = logging.getLogger(__name__)

PhotoSource = Union[bytes, bytearray, str, Path, Callable[[], Optional[bytes]]]


def read_photo_bytes(source: PhotoSource) -> bytes:
    """
    Read raw bytes from a photo source.

    Args:
        source: Encoded bytes, a file path, or a callable returning bytes

    Raises:
        SourceLoadFailed: If the source yields nothing or cannot be read
        TypeError: If source is none of the supported kinds
    """
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
    elif isinstance(source, (str, Path)):
        try:
            data = Path(source).read_bytes()
        except OSError as e:
            raise SourceLoadFailed() from e
    elif callable(source):
        try:
            data = source()
        except Exception as e:
            # Whatever the provider failed with, the photo is unavailable
            logger.debug(f"Photo provider raised: {e!r}")
            raise SourceLoadFailed() from e
    else:
        raise TypeError(f"Unsupported photo source: {type(source)}")

    if not isinstance(data, (bytes, bytearray)) or not data:
        raise SourceLoadFailed()
    return bytes(data)


def fetch_photo(source: PhotoSource, name: Optional[str] = None) -> PhotoRecord:
    """
    Read and decode a photo into a PhotoRecord.

    Raises:
        SourceLoadFailed: If the photo cannot be read or decoded
    """
    path = Path(source) if isinstance(source, (str, Path)) else None
    original = decode_image_bytes(read_photo_bytes(source))

    if name is None:
        name = path.name if path is not None else "Photo"
    return PhotoRecord(name=name, original=original, path=path)


class PhotoLoader:
    def __init__(self, max_workers: int = PHOTO_LOADER_MAX_WORKERS) -> None:
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="photo-loader")
        self._latest: Optional[Future] = None

    def load_async(self, source: PhotoSource, name: Optional[str] = None) -> Future:
        """
        Start loading a photo in the background.

        Returns:
            Future resolving to a PhotoRecord, or raising SourceLoadFailed
        """
        future = self._pool.submit(fetch_photo, source, name)
        self._latest = future
        logger.debug(f"Photo load submitted: {name or source!r:.80}")
        return future

    def is_latest(self, future: Future) -> bool:
        return future is self._latest

    def deliver(self, session: Any, future: Future) -> Optional[PhotoRecord]:
        """
        Feed a completed load into the session.

        Must be called on the thread that owns the session. Load failures
        are reported through the session's error handler.

        Returns:
            The delivered PhotoRecord, or None if the load failed or a newer
            request superseded it
        """
        if not self.is_latest(future):
            logger.debug("Discarding superseded photo load")
            return None

        try:
            record = future.result()
        except InstaFilterError as e:
            session.report_error(e)
            return None

        session.load_source(record.original)
        return record

    def load_into(self, session: Any, source: PhotoSource, timeout: Optional[float] = None) -> Optional[PhotoRecord]:
        """
        Load a photo and feed it into the session, blocking until done.
        """
        future = self.load_async(source)
        future.exception(timeout=timeout)
        return self.deliver(session, future)

    def shutdown(self, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait)
