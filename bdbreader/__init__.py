"""
Read-only lookups in BTree access method database files.

Usage:
    with open_file("users.db") as db:
        value = db.get(b"alice")
"""

from .core import (
    BdbError,
    FormatError,
    BadMagicError,
    UnsupportedFormatError,
    CorruptMetadataError,
    PageError,
    PageOutOfRangeError,
    UnexpectedPageTypeError,
    EntryIndexError,
    CorruptionError,
    TreeCycleError,
    TreeDepthError,
    ReaderIOError,
    TruncatedReadError,
    EntryDecodeError,
    KeyNotFoundError,
    UnsupportedOperationError,
    KeysUnsupportedError,
    ReaderConfig,
)
from .database import open_reader, open_file
from .primitives import AccessMethod, PageType
from .storage.detector import detect_format
from .storage.index.btree import BTreeReader
from .storage.metadata import Metadata
from .storage.page import Page, PageInfo, describe_page

__all__ = [
    "open_reader",
    "open_file",
    "detect_format",
    "describe_page",
    "AccessMethod",
    "PageType",
    "BTreeReader",
    "ReaderConfig",
    "Metadata",
    "Page",
    "PageInfo",
    "BdbError",
    "FormatError",
    "BadMagicError",
    "UnsupportedFormatError",
    "CorruptMetadataError",
    "PageError",
    "PageOutOfRangeError",
    "UnexpectedPageTypeError",
    "EntryIndexError",
    "CorruptionError",
    "TreeCycleError",
    "TreeDepthError",
    "ReaderIOError",
    "TruncatedReadError",
    "EntryDecodeError",
    "KeyNotFoundError",
    "UnsupportedOperationError",
    "KeysUnsupportedError",
]
