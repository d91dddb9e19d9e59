import io
import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional

from bdbreader.core.exceptions import ReaderIOError, TruncatedReadError

logger = logging.getLogger(__name__)


@dataclass
class StreamStats:
    reads: int = 0
    bytes_read: int = 0


class StreamReader:
    """
    Positioned, exact-length reads over a seekable binary stream.

    Every read seeks to an absolute offset first, so callers never depend on
    where the previous read left the stream. Failures are never retried.
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.stats = StreamStats()

    def read_at(self, offset: int, size: int,
                page_number: Optional[int] = None,
                entry_index: Optional[int] = None) -> bytes:
        """
        Read exactly ``size`` bytes starting at ``offset``.

        Args:
            offset: Absolute byte offset in the stream
            size: Number of bytes wanted
            page_number: Page being decoded, used to annotate errors
            entry_index: Entry being decoded, used to annotate errors

        Returns:
            The bytes read

        Raises:
            TruncatedReadError: If the stream ends early
            ReaderIOError: If seeking or reading fails
        """
        try:
            self.stream.seek(offset, io.SEEK_SET)
            data = self.stream.read(size)
        except (OSError, ValueError) as e:
            raise ReaderIOError(
                f"failed to read {size} bytes at offset {offset}: {e}",
                page_number, entry_index) from e

        if data is None:
            data = b''
        self.stats.reads += 1
        self.stats.bytes_read += len(data)

        if len(data) < size:
            raise TruncatedReadError(offset, size, len(data),
                                     page_number, entry_index)
        return bytes(data)

    def rewind(self) -> None:
        try:
            self.stream.seek(0, io.SEEK_SET)
        except (OSError, ValueError) as e:
            raise ReaderIOError(f"failed to rewind stream: {e}") from e

    def close(self) -> None:
        logger.debug("Closing stream %r", self.stream)
        self.stream.close()
