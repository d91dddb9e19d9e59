"""
Shared fixtures: an in-memory builder for BTree database images.

Pages are laid out the way the on-disk format stores them: a 26-byte header,
the entry-offset table right after it, and entries packed from the end of
the page downwards.
"""

import io
import struct
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from bdbreader.primitives import BTREE_MAGIC, PageType

KEYDATA = 1
PAGE_HEADER = struct.Struct('<8sIIIHHBB')


def pack_metadata(page_size: int, last_pgno: int, root: int,
                  magic: int = BTREE_MAGIC, version: int = 9,
                  encrypt_alg: int = 0, key_count: int = 0,
                  record_count: int = 0, min_key: int = 2,
                  uid: bytes = b'\x01' * 20) -> bytes:
    meta = bytearray(512)
    struct.pack_into('<II', meta, 0, 1, 42)                      # LSN
    struct.pack_into('<IIII', meta, 8, 0, magic, version, page_size)
    struct.pack_into('<BBBB', meta, 24, encrypt_alg,
                     PageType.BTREE_META, 0, 0)
    struct.pack_into('<IIIIII', meta, 28, 0, last_pgno, 0,
                     key_count, record_count, 0)
    meta[52:72] = uid
    struct.pack_into('<IIIII', meta, 72, 0, min_key, 0, 0, root)
    struct.pack_into('<I', meta, 460, 0)
    meta[476:492] = b'\x02' * 16
    meta[492:512] = b'\x03' * 20
    return bytes(meta)


def leaf_item(data: bytes, item_type: int = KEYDATA) -> bytes:
    return struct.pack('<HB', len(data), item_type) + data


def internal_entry(key: Optional[bytes], child_pgno: int,
                   nrecs: int = 0) -> bytes:
    key = key or b''
    return struct.pack('<HBBII', len(key), KEYDATA, 0, child_pgno,
                       nrecs) + key


class DatabaseImageBuilder:
    """Assembles a database file image page by page."""

    def __init__(self, page_size: int = 512):
        self.page_size = page_size
        self.pages: Dict[int, bytes] = {}
        self.root = 1
        self.magic = BTREE_MAGIC
        self.encrypt_alg = 0
        self.last_pgno: Optional[int] = None
        self._next_pgno = 1

    def page(self, pgno: int, page_type: int, entries: Sequence[bytes],
             level: int = 1, prev_pgno: int = 0,
             next_pgno: int = 0) -> 'DatabaseImageBuilder':
        image = bytearray(self.page_size)
        table_end = PAGE_HEADER.size + 2 * len(entries)
        cursor = self.page_size
        offsets = []
        for entry in entries:
            cursor -= len(entry)
            image[cursor:cursor + len(entry)] = entry
            offsets.append(cursor)
        assert cursor >= table_end, "entries do not fit in the page"

        PAGE_HEADER.pack_into(image, 0, b'\x00' * 8, pgno, prev_pgno,
                              next_pgno, len(entries), cursor, level,
                              page_type)
        struct.pack_into(f'<{len(entries)}H', image, PAGE_HEADER.size,
                         *offsets)
        self.pages[pgno] = bytes(image)
        self._next_pgno = max(self._next_pgno, pgno + 1)
        return self

    def leaf(self, pgno: int, pairs: Sequence[Tuple[bytes, bytes]],
             **kwargs) -> 'DatabaseImageBuilder':
        entries = []
        for key, value in pairs:
            entries.append(leaf_item(key))
            entries.append(leaf_item(value))
        return self.page(pgno, PageType.LBTREE, entries, **kwargs)

    def internal(self, pgno: int,
                 children: Sequence[Tuple[Optional[bytes], int]],
                 level: int = 2) -> 'DatabaseImageBuilder':
        entries = [internal_entry(key, child) for key, child in children]
        return self.page(pgno, PageType.IBTREE, entries, level=level)

    def tree(self, pairs: Sequence[Tuple[bytes, bytes]],
             leaf_capacity: int = 4, fanout: int = 4) -> int:
        """Lay out sorted pairs as a complete tree and make it the root."""
        pairs = sorted(pairs)
        leaves = [pairs[i:i + leaf_capacity]
                  for i in range(0, len(pairs), leaf_capacity)]
        first_leaf = self._next_pgno
        nodes: List[Tuple[bytes, int]] = []
        for n, chunk in enumerate(leaves):
            pgno = first_leaf + n
            prev_pgno = pgno - 1 if n else 0
            next_pgno = pgno + 1 if n < len(leaves) - 1 else 0
            self.leaf(pgno, chunk, prev_pgno=prev_pgno, next_pgno=next_pgno)
            nodes.append((chunk[0][0], pgno))

        level = 2
        while len(nodes) > 1:
            parents = []
            for i in range(0, len(nodes), fanout):
                chunk = nodes[i:i + fanout]
                pgno = self._next_pgno
                children = [(None if n == 0 else key, child)
                            for n, (key, child) in enumerate(chunk)]
                self.internal(pgno, children, level=level)
                parents.append((chunk[0][0], pgno))
            nodes = parents
            level += 1

        self.root = nodes[0][1]
        return self.root

    def build(self) -> bytes:
        last_pgno = self.last_pgno
        if last_pgno is None:
            last_pgno = max(self.pages, default=0)
        size = max(last_pgno, max(self.pages, default=0)) + 1
        image = bytearray(self.page_size * size)
        image[:512] = pack_metadata(self.page_size, last_pgno, self.root,
                                    magic=self.magic,
                                    encrypt_alg=self.encrypt_alg)
        for pgno, data in self.pages.items():
            start = pgno * self.page_size
            image[start:start + self.page_size] = data
        return bytes(image)

    def stream(self) -> io.BytesIO:
        return io.BytesIO(self.build())


class FailingStream(io.BytesIO):
    """A stream whose reads start failing after ``fail_after`` calls."""

    def __init__(self, data: bytes, fail_after: int = 0):
        super().__init__(data)
        self.fail_after = fail_after
        self.read_calls = 0

    def read(self, size=-1):
        self.read_calls += 1
        if self.read_calls > self.fail_after:
            raise OSError("device not ready")
        return super().read(size)


@pytest.fixture
def builder():
    return DatabaseImageBuilder()


@pytest.fixture
def failing_stream():
    return FailingStream


@pytest.fixture
def alpha_beta_stream():
    """Single leaf root holding alpha=1 and beta=2."""
    return (DatabaseImageBuilder()
            .leaf(1, [(b"alpha", b"1"), (b"beta", b"2")])
            .stream())


@pytest.fixture
def branching_stream():
    """
    Root internal page with children [_, "b", "d"].

    Page 2 holds keys below "b", page 3 holds "b".."c", page 4 holds "d"..
    """
    return (DatabaseImageBuilder()
            .internal(1, [(None, 2), (b"b", 3), (b"d", 4)])
            .leaf(2, [(b"a", b"in-2"), (b"aa", b"also-2")], next_pgno=3)
            .leaf(3, [(b"b", b"in-3"), (b"c", b"also-3")],
                  prev_pgno=2, next_pgno=4)
            .leaf(4, [(b"d", b"in-4"), (b"e", b"also-4")], prev_pgno=3)
            .stream())


@pytest.fixture
def reference_pairs():
    return [(f"key{i:04d}".encode(), f"value-{i * 7}".encode())
            for i in range(0, 400, 3)]


@pytest.fixture
def reference_stream(reference_pairs):
    """A four-level tree built from reference_pairs."""
    builder = DatabaseImageBuilder(page_size=1024)
    builder.tree(reference_pairs, leaf_capacity=5, fanout=4)
    return builder.stream()


@pytest.fixture
def pack_header():
    return pack_metadata
