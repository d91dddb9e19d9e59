from enum import IntEnum
from typing import Union


class PageType(IntEnum):
    """Page type byte stored at offset 25 of every page header."""

    INVALID = 0
    DUPLICATE = 1        # Deprecated in 3.1
    HASH_UNSORTED = 2    # Hash pages created pre 4.6, deprecated
    IBTREE = 3
    IRECNO = 4
    LBTREE = 5
    LRECNO = 6
    OVERFLOW = 7
    HASH_META = 8
    BTREE_META = 9
    QAM_META = 10
    QAM_DATA = 11
    LDUP = 12
    HASH = 13
    HEAP_META = 14
    HEAP = 15
    IHEAP = 16

    @classmethod
    def decode(cls, raw: int) -> Union['PageType', int]:
        """Map a raw byte to a PageType, keeping unknown values as ints."""
        try:
            return cls(raw)
        except ValueError:
            return raw

    @property
    def is_leaf(self) -> bool:
        return self in _LEAF_TYPES


_LEAF_TYPES = frozenset({PageType.LBTREE, PageType.LRECNO, PageType.LDUP})


def page_type_name(page_type: Union[PageType, int]) -> str:
    if isinstance(page_type, PageType):
        return page_type.name
    return f"UNKNOWN({page_type})"
