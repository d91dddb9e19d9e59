import struct
from dataclasses import dataclass
from typing import Tuple, Union

from bdbreader.core.exceptions import EntryIndexError
from bdbreader.primitives import LSN, PageType, page_type_name


@dataclass(frozen=True)
class PageHeader:
    """
    Fixed header at the start of every page.

    Layout (little-endian):
        0-7    LSN
        8-11   own page number
        12-15  previous sibling
        16-19  next sibling
        20-21  entry count
        22-23  high free byte offset
        24     tree level
        25     page type
    """
    lsn: LSN
    pgno: int
    prev_pgno: int
    next_pgno: int
    entries: int
    hf_offset: int
    level: int
    page_type: Union[PageType, int]

    STRUCT = struct.Struct('<8sIIIHHBB')
    SIZE = STRUCT.size

    @classmethod
    def from_bytes(cls, data: bytes) -> 'PageHeader':
        (lsn, pgno, prev_pgno, next_pgno, entries, hf_offset,
         level, page_type) = cls.STRUCT.unpack_from(data)
        return cls(LSN.from_bytes(lsn), pgno, prev_pgno, next_pgno,
                   entries, hf_offset, level, PageType.decode(page_type))


@dataclass(frozen=True)
class Page:
    """
    A decoded page header plus its entry-offset table.

    ``pgno`` is the page number the page was read from, which is what entry
    positions are computed against. The number stored in the header is kept
    on ``header.pgno``.
    """
    pgno: int
    header: PageHeader
    entry_offsets: Tuple[int, ...]

    @property
    def page_type(self) -> Union[PageType, int]:
        return self.header.page_type

    @property
    def num_entries(self) -> int:
        return self.header.entries

    @property
    def is_leaf(self) -> bool:
        return isinstance(self.page_type, PageType) and self.page_type.is_leaf

    def entry_offset(self, index: int) -> int:
        """Return the in-page byte offset of entry ``index``."""
        if not 0 <= index < len(self.entry_offsets):
            raise EntryIndexError(
                f"entry index out of range [0, {len(self.entry_offsets)})",
                self.pgno, index)
        return self.entry_offsets[index]

    @staticmethod
    def decode_offsets(data: bytes, count: int) -> Tuple[int, ...]:
        return struct.unpack(f'<{count}H', data[:count * 2])

    def __str__(self) -> str:
        return (f"Page({self.pgno}, {page_type_name(self.page_type)}, "
                f"entries={self.num_entries})")
