"""Entry points for opening a database file."""

import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from bdbreader.core.config import ReaderConfig
from bdbreader.storage.detector import detect_format, require_btree
from bdbreader.storage.disk import StreamReader
from bdbreader.storage.index.btree import BTreeReader
from bdbreader.storage.metadata import read_metadata

logger = logging.getLogger(__name__)


def open_reader(stream: BinaryIO,
                config: Optional[ReaderConfig] = None) -> BTreeReader:
    """
    Open a database from a seekable binary stream.

    The caller keeps ownership of the stream; closing the reader leaves it
    open. Only one database per stream is read. Wrap a slice of a larger
    file in ``io.BytesIO`` to read an embedded one.

    Raises:
        UnsupportedFormatError: If the file does not use the BTree method
        BadMagicError: If the btree header magic is wrong
        ReaderIOError: If the header cannot be read
    """
    return _open(stream, config, owns_stream=False)


def open_file(path: Union[str, Path],
              config: Optional[ReaderConfig] = None) -> BTreeReader:
    """Open a database file by path. The returned reader owns the file handle."""
    stream = open(path, 'rb')
    try:
        reader = _open(stream, config, owns_stream=True)
    except BaseException:
        stream.close()
        raise
    logger.info("Opened %s", path)
    return reader


def _open(stream: BinaryIO, config: Optional[ReaderConfig],
          owns_stream: bool) -> BTreeReader:
    require_btree(detect_format(stream))
    reader = StreamReader(stream)
    metadata = read_metadata(reader)
    return BTreeReader(reader, metadata, config, owns_stream=owns_stream)
