import logging
from typing import List, Optional, Set, Tuple, Union

from bdbreader.core.config import ReaderConfig
from bdbreader.core.exceptions import (
    KeyNotFoundError,
    KeysUnsupportedError,
    TreeCycleError,
    TreeDepthError,
    UnexpectedPageTypeError,
    UnsupportedOperationError,
)
from bdbreader.primitives import PageType
from bdbreader.storage.disk import StreamReader, StreamStats
from bdbreader.storage.metadata import Metadata
from bdbreader.storage.page import Page, PageCache

from .entries import EntryDecoder, ItemType

logger = logging.getLogger(__name__)

KeyLike = Union[bytes, bytearray, memoryview, str]


class BTreeReader:
    """
    Read-only key lookups in a BTree access method database.

    This class walks the tree stored in the file, providing:
    - Exact-match lookups with get() and has_key()
    - Lazy page decoding with a per-reader page cache
    - Bounded descent that detects cyclic or runaway trees

    Search descends from the root page. On an internal page the first entry
    is the default child and its key sorts below every search key; the
    chosen child is the last entry whose key is <= the search key. On a leaf
    page keys sit at even entry indices with their data item immediately
    after.

    A reader is not thread-safe. Use one reader per thread or guard calls
    with a lock.
    """

    def __init__(self, reader: StreamReader, metadata: Metadata,
                 config: Optional[ReaderConfig] = None,
                 owns_stream: bool = False):
        self.reader = reader
        self.metadata = metadata
        self.config = config or ReaderConfig()
        self.page_cache = PageCache(reader, metadata)
        self.decoder = EntryDecoder(reader, metadata.page_size)
        self._owns_stream = owns_stream
        self._closed = False

    @property
    def root(self) -> int:
        return self.metadata.root

    @property
    def stats(self) -> StreamStats:
        return self.reader.stats

    def get(self, key: KeyLike) -> bytes:
        """
        Return the value stored under ``key``.

        Raises:
            KeyNotFoundError: If the key is not in the database
            UnsupportedOperationError: If the value is stored off-page
        """
        pgno, index = self.search(key)
        page = self.page_cache.get(pgno)
        item = self.decoder.read_leaf_item(page, index + 1)

        if item.kind in (ItemType.OVERFLOW, ItemType.DUPLICATE):
            raise UnsupportedOperationError(
                f"value stored as {item.kind.name} item is not supported",
                pgno, index + 1)
        return item.data

    def has_key(self, key: KeyLike) -> bool:
        """Report whether ``key`` is present. Errors other than not-found propagate."""
        try:
            self.search(key)
        except KeyNotFoundError:
            return False
        return True

    def keys(self) -> List[bytes]:
        """
        Key enumeration is not implemented.

        Always raises KeysUnsupportedError. It is a KeyNotFoundError, but it
        does not mean the database is empty.
        """
        raise KeysUnsupportedError()

    def search(self, key: KeyLike) -> Tuple[int, int]:
        """
        Find the leaf page and entry index holding ``key``.

        Returns:
            (page number, index of the key item on that page)

        Raises:
            KeyNotFoundError: If no leaf item equals the key
            UnexpectedPageTypeError: If descent reaches a non-btree page
            TreeCycleError: If descent revisits a page
            TreeDepthError: If descent exceeds config.max_depth pages
        """
        key = self._to_bytes(key)
        leaf = self._find_leaf_page(key)

        index = self._find_in_leaf(leaf, key)
        if index < 0:
            raise KeyNotFoundError(key)
        return leaf.pgno, index

    def _find_leaf_page(self, key: bytes) -> Page:
        """Navigate from the root to the leaf page that should contain key."""
        page = self.page_cache.get(self.root)
        visited: Set[int] = {page.pgno}
        depth = 1

        while page.page_type == PageType.IBTREE:
            child_pgno = self._find_child_page(page, key)
            logger.debug("Descending from page %d to page %d",
                         page.pgno, child_pgno)

            if self.config.detect_cycles and child_pgno in visited:
                raise TreeCycleError(
                    f"descent revisits page {child_pgno}", page.pgno)
            depth += 1
            if depth > self.config.max_depth:
                raise TreeDepthError(
                    f"descent exceeded {self.config.max_depth} pages",
                    page.pgno)

            visited.add(child_pgno)
            page = self.page_cache.get(child_pgno)

        if page.page_type != PageType.LBTREE:
            raise UnexpectedPageTypeError(page.page_type, page.pgno)
        return page

    def _find_child_page(self, page: Page, key: bytes) -> int:
        """Pick the greatest child whose separator key is <= key."""
        chosen = self.decoder.read_internal(page, 0)
        for i in range(1, page.num_entries):
            entry = self.decoder.read_internal(page, i)
            if key < entry.key:
                break
            chosen = entry
        return chosen.child_pgno

    def _find_in_leaf(self, page: Page, key: bytes) -> int:
        for i in range(0, page.num_entries, 2):
            item = self.decoder.read_leaf_item(page, i)
            if item.data == key:
                return i
        return -1

    def _to_bytes(self, key: KeyLike) -> bytes:
        if isinstance(key, str):
            return key.encode(self.config.key_encoding)
        if isinstance(key, (bytes, bytearray, memoryview)):
            return bytes(key)
        raise TypeError(
            f"key must be bytes or str, got {type(key).__name__}")

    def close(self) -> None:
        """Close the underlying stream if this reader opened it."""
        if self._closed:
            return
        self._closed = True
        if self._owns_stream:
            self.reader.close()

    def __contains__(self, key: KeyLike) -> bool:
        return self.has_key(key)

    def __getitem__(self, key: KeyLike) -> bytes:
        return self.get(key)

    def __enter__(self) -> 'BTreeReader':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __str__(self) -> str:
        return (f"BTreeReader(page_size={self.metadata.page_size}, "
                f"last_pgno={self.metadata.last_pgno}, root={self.root})")
