from .exceptions import (
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
)
from .config import ReaderConfig

__all__ = [
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
    "ReaderConfig",
]
