import logging

from cachetools import Cache

from bdbreader.core.exceptions import PageOutOfRangeError
from bdbreader.storage.disk import StreamReader
from bdbreader.storage.metadata import Metadata
from .page import Page, PageHeader

logger = logging.getLogger(__name__)


class PageCache:
    """
    Lazily decoded pages, keyed by page number.

    Pages are fetched from the stream at most once and kept for the life of
    the owning reader. The file is assumed not to change underneath, so
    entries are never invalidated. Capacity equals the page count of the
    file, which means the cache never has to evict.
    """

    def __init__(self, reader: StreamReader, metadata: Metadata):
        self.reader = reader
        self.page_size = metadata.page_size
        self.last_pgno = metadata.last_pgno
        self._pages: Cache = Cache(maxsize=metadata.page_count)
        self.hits = 0
        self.misses = 0

    def get(self, pgno: int) -> Page:
        """
        Return page ``pgno``, reading it on first access.

        Raises:
            PageOutOfRangeError: If pgno is outside [0, last_pgno]
            ReaderIOError: If the page cannot be read
        """
        if not 0 <= pgno <= self.last_pgno:
            raise PageOutOfRangeError(
                f"page index out of range [0, {self.last_pgno}]", pgno)

        page = self._pages.get(pgno)
        if page is not None:
            self.hits += 1
            return page

        self.misses += 1
        page = self._load(pgno)
        self._pages[pgno] = page
        return page

    def _load(self, pgno: int) -> Page:
        offset = pgno * self.page_size
        header = PageHeader.from_bytes(
            self.reader.read_at(offset, PageHeader.SIZE, page_number=pgno))

        table_size = header.entries * 2
        raw_offsets = b''
        if table_size:
            raw_offsets = self.reader.read_at(
                offset + PageHeader.SIZE, table_size, page_number=pgno)

        logger.debug("Loaded page %d: type=%s entries=%d level=%d",
                     pgno, header.page_type, header.entries, header.level)
        return Page(pgno, header,
                    Page.decode_offsets(raw_offsets, header.entries))

    def __contains__(self, pgno: int) -> bool:
        return pgno in self._pages

    def __len__(self) -> int:
        return len(self._pages)
