"""
Decoding of the metadata page.

Page 0 of a BTree database holds a fixed 512-byte header shared by all
access methods, with a btree-specific block in the middle:

    0-71     generic header (LSN, magic, version, page size, counts, uid)
    72-91    btree block (minkey, recno lengths, root page)
    92-459   unused
    460-511  crypto trailer (magic, IV, checksum)

All integers are little-endian. Encryption and checksum fields are decoded
but never verified.
"""

import logging
import struct
from dataclasses import dataclass
from typing import Union

from bdbreader.core.exceptions import BadMagicError, CorruptMetadataError
from bdbreader.primitives import LSN, BTREE_MAGIC, PageType
from .disk import StreamReader

logger = logging.getLogger(__name__)

METADATA_SIZE = 512
MIN_PAGE_SIZE = 512
MAX_PAGE_SIZE = 64 * 1024

_GENERIC_FORMAT = struct.Struct('<IIIIBBBBIIIIII20s')   # bytes 8-71
_BTREE_FORMAT = struct.Struct('<IIIII')                 # bytes 72-91
_TRAILER_FORMAT = struct.Struct('<I12s16s20s')          # bytes 460-511

_GENERIC_OFFSET = 8
_BTREE_OFFSET = 72
_TRAILER_OFFSET = 460


@dataclass(frozen=True)
class Metadata:
    """Immutable view of the database header."""
    lsn: LSN
    pgno: int
    magic: int
    version: int
    page_size: int
    encrypt_alg: int
    page_type: Union[PageType, int]
    meta_flags: int
    free: int
    last_pgno: int
    nparts: int
    key_count: int
    record_count: int
    flags: int
    uid: bytes
    min_key: int
    re_len: int
    re_pad: int
    root: int
    crypto_magic: int
    iv: bytes
    checksum: bytes

    @property
    def is_encrypted(self) -> bool:
        return self.encrypt_alg != 0

    @property
    def page_count(self) -> int:
        return self.last_pgno + 1

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Metadata':
        """Decode a 512-byte header. Does not validate the magic."""
        if len(data) < METADATA_SIZE:
            raise CorruptMetadataError(
                f"metadata needs {METADATA_SIZE} bytes, got {len(data)}")

        (pgno, magic, version, page_size,
         encrypt_alg, page_type, meta_flags, _unused,
         free, last_pgno, nparts, key_count, record_count, flags,
         uid) = _GENERIC_FORMAT.unpack_from(data, _GENERIC_OFFSET)

        _unused, min_key, re_len, re_pad, root = _BTREE_FORMAT.unpack_from(
            data, _BTREE_OFFSET)

        crypto_magic, _reserved, iv, checksum = _TRAILER_FORMAT.unpack_from(
            data, _TRAILER_OFFSET)

        return cls(
            lsn=LSN.from_bytes(data),
            pgno=pgno,
            magic=magic,
            version=version,
            page_size=page_size,
            encrypt_alg=encrypt_alg,
            page_type=PageType.decode(page_type),
            meta_flags=meta_flags,
            free=free,
            last_pgno=last_pgno,
            nparts=nparts,
            key_count=key_count,
            record_count=record_count,
            flags=flags,
            uid=uid,
            min_key=min_key,
            re_len=re_len,
            re_pad=re_pad,
            root=root,
            crypto_magic=crypto_magic,
            iv=iv,
            checksum=checksum,
        )


def read_metadata(reader: StreamReader) -> Metadata:
    """
    Read and validate the btree header at the start of the stream.

    Args:
        reader: Stream positioned anywhere; the header is read from offset 0

    Returns:
        The decoded Metadata

    Raises:
        BadMagicError: If the magic is not the btree constant
        CorruptMetadataError: If the page size is unusable
        TruncatedReadError: If the stream is shorter than the header
    """
    data = reader.read_at(0, METADATA_SIZE, page_number=0)
    meta = Metadata.from_bytes(data)

    if meta.magic != BTREE_MAGIC:
        raise BadMagicError(BTREE_MAGIC, meta.magic)

    _validate_page_size(meta.page_size)

    if meta.is_encrypted:
        logger.warning(
            "Database is encrypted (algorithm %d); keys and values are read "
            "without decryption", meta.encrypt_alg)

    logger.info("Opened btree database: version=%d page_size=%d "
                "last_pgno=%d root=%d", meta.version, meta.page_size,
                meta.last_pgno, meta.root)
    return meta


def _validate_page_size(page_size: int) -> None:
    # Sizes are powers of two; anything else would misalign every page.
    if (page_size < MIN_PAGE_SIZE or page_size > MAX_PAGE_SIZE
            or page_size & (page_size - 1)):
        raise CorruptMetadataError(f"invalid page size {page_size}",
                                   page_number=0)
