import logging
import struct
from typing import BinaryIO

from bdbreader.core.exceptions import UnsupportedFormatError
from bdbreader.primitives import AccessMethod
from .disk import StreamReader

logger = logging.getLogger(__name__)

SNIFF_SIZE = 16
MAGIC_OFFSET = 12


def detect_format(stream: BinaryIO) -> AccessMethod:
    """
    Identify the access method of a database from its header magic.

    The stream is rewound to offset 0 afterwards.

    Raises:
        UnsupportedFormatError: If the magic is unknown
        TruncatedReadError: If the stream holds fewer than 16 bytes
    """
    reader = StreamReader(stream)
    header = reader.read_at(0, SNIFF_SIZE, page_number=0)
    reader.rewind()

    magic, = struct.unpack_from('<I', header, MAGIC_OFFSET)
    try:
        method = AccessMethod.from_magic(magic)
    except KeyError:
        raise UnsupportedFormatError(f"unknown magic: 0x{magic:06x}") from None

    logger.debug("Detected %s access method (magic 0x%06x)",
                 method.value, magic)
    return method


def require_btree(method: AccessMethod) -> None:
    if method is not AccessMethod.BTREE:
        raise UnsupportedFormatError(
            f"{method.value} access method is not supported")
