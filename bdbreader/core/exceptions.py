"""Custom exceptions for the database reader."""

from typing import Optional


class BdbError(Exception):
    """Base exception for all reader errors."""

    def __init__(self, message: str, page_number: Optional[int] = None,
                 entry_index: Optional[int] = None):
        self.page_number = page_number
        self.entry_index = entry_index
        super().__init__(self._annotate(message))

    def _annotate(self, message: str) -> str:
        where = []
        if self.page_number is not None:
            where.append(f"page {self.page_number}")
        if self.entry_index is not None:
            where.append(f"entry {self.entry_index}")
        if not where:
            return message
        return f"{message} ({', '.join(where)})"


class FormatError(BdbError):
    """Base class for file format errors."""
    pass


class BadMagicError(FormatError):
    """Raised when the header magic does not match the BTree constant."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"wanted magic 0x{expected:06x}, got 0x{actual:06x}")


class UnsupportedFormatError(FormatError):
    """Raised when the file uses an access method this reader cannot decode."""
    pass


class CorruptMetadataError(FormatError):
    """Raised when header fields hold impossible values."""
    pass


class PageError(BdbError):
    """Base class for page addressing errors."""
    pass


class PageOutOfRangeError(PageError):
    """Raised when a page number lies outside [0, last_pgno]."""
    pass


class UnexpectedPageTypeError(PageError):
    """Raised when traversal reaches a page the search cannot handle."""

    def __init__(self, page_type, page_number: Optional[int] = None):
        self.page_type = page_type
        name = getattr(page_type, "name", str(page_type))
        super().__init__(f"unexpected page type {name}", page_number)


class EntryIndexError(PageError):
    """Raised when an entry index is outside the page's offset table."""
    pass


class CorruptionError(BdbError):
    """Raised when the tree structure is inconsistent."""
    pass


class TreeCycleError(CorruptionError):
    """Raised when a descent visits the same page twice."""
    pass


class TreeDepthError(CorruptionError):
    """Raised when a descent exceeds the configured depth bound."""
    pass


class ReaderIOError(BdbError):
    """Raised when reading the underlying stream fails."""
    pass


class TruncatedReadError(ReaderIOError):
    """Raised when the stream ends before the requested bytes were read."""

    def __init__(self, offset: int, wanted: int, got: int,
                 page_number: Optional[int] = None,
                 entry_index: Optional[int] = None):
        self.offset = offset
        self.wanted = wanted
        self.got = got
        super().__init__(
            f"short read at offset {offset}: wanted {wanted} bytes, got {got}",
            page_number, entry_index)


class EntryDecodeError(ReaderIOError):
    """Raised when a page entry cannot be decoded."""
    pass


class KeyNotFoundError(BdbError):
    """Raised when the requested key is not in the database."""

    def __init__(self, key: bytes):
        self.key = key
        super().__init__(f"key not found: {key!r}")


class UnsupportedOperationError(BdbError):
    """Raised for operations the reader does not implement."""
    pass


class KeysUnsupportedError(KeyNotFoundError, UnsupportedOperationError):
    """
    Raised by keys().

    Key enumeration is not implemented. The error is still a
    KeyNotFoundError for callers matching on not-found, but it must never be
    read as an empty database.
    """

    def __init__(self):
        self.key = None
        BdbError.__init__(self, "key enumeration is not supported")
