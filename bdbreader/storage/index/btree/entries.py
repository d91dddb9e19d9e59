import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from bdbreader.core.exceptions import EntryDecodeError, ReaderIOError
from bdbreader.storage.disk import StreamReader
from bdbreader.storage.page import Page


class ItemType(IntEnum):
    """Low bits of an entry's type byte."""
    KEYDATA = 1
    DUPLICATE = 2
    OVERFLOW = 3


DELETED_FLAG = 0x80

_ITEM_HEADER = struct.Struct('<HB')          # length, type
_INTERNAL_HEADER = struct.Struct('<HBBII')   # length, type, unused, pgno, nrecs


@dataclass(frozen=True)
class LeafItem:
    """A key or data item on a leaf page."""
    length: int
    item_type: int
    data: bytes

    HEADER_SIZE = _ITEM_HEADER.size

    @property
    def is_deleted(self) -> bool:
        return bool(self.item_type & DELETED_FLAG)

    @property
    def kind(self) -> Union[ItemType, int]:
        raw = self.item_type & ~DELETED_FLAG
        try:
            return ItemType(raw)
        except ValueError:
            return raw


@dataclass(frozen=True)
class InternalEntry:
    """A separator key and child reference on an internal page."""
    length: int
    item_type: int
    child_pgno: int
    nrecs: int
    key: bytes

    HEADER_SIZE = _INTERNAL_HEADER.size


class EntryDecoder:
    """
    Decodes single entries at their absolute position in the file.

    Entries are read straight from the stream rather than from a buffered
    page image, so only the bytes of the requested entry are touched.
    """

    def __init__(self, reader: StreamReader, page_size: int):
        self.reader = reader
        self.page_size = page_size

    def read_internal(self, page: Page, index: int) -> InternalEntry:
        """Decode internal entry ``index`` of ``page``."""
        offset = self._entry_position(page, index)
        try:
            header = self.reader.read_at(offset, InternalEntry.HEADER_SIZE,
                                         page.pgno, index)
            length, item_type, _unused, child_pgno, nrecs = \
                _INTERNAL_HEADER.unpack(header)
            key = self._read_payload(offset + InternalEntry.HEADER_SIZE,
                                     length, page.pgno, index)
        except ReaderIOError as e:
            raise EntryDecodeError(f"cannot decode internal entry: {e}",
                                   page.pgno, index) from e
        return InternalEntry(length, item_type, child_pgno, nrecs, key)

    def read_leaf_item(self, page: Page, index: int) -> LeafItem:
        """Decode key or data item ``index`` of leaf ``page``."""
        offset = self._entry_position(page, index)
        try:
            header = self.reader.read_at(offset, LeafItem.HEADER_SIZE,
                                         page.pgno, index)
            length, item_type = _ITEM_HEADER.unpack(header)
            data = self._read_payload(offset + LeafItem.HEADER_SIZE,
                                      length, page.pgno, index)
        except ReaderIOError as e:
            raise EntryDecodeError(f"cannot decode leaf item: {e}",
                                   page.pgno, index) from e
        return LeafItem(length, item_type, data)

    def _entry_position(self, page: Page, index: int) -> int:
        return page.pgno * self.page_size + page.entry_offset(index)

    def _read_payload(self, offset: int, length: int,
                      pgno: int, index: int) -> bytes:
        if length == 0:
            return b''
        return self.reader.read_at(offset, length, pgno, index)
