from .entries import EntryDecoder, InternalEntry, LeafItem, ItemType, DELETED_FLAG
from .btree_reader import BTreeReader

__all__ = ["EntryDecoder", "InternalEntry", "LeafItem", "ItemType",
           "DELETED_FLAG", "BTreeReader"]
