from dataclasses import dataclass

from bdbreader.primitives import page_type_name


@dataclass(frozen=True)
class PageInfo:
    pgno: int
    page_type: str
    level: int
    entries: int
    prev_pgno: int
    next_pgno: int
    hf_offset: int
    is_leaf: bool


def describe_page(reader, pgno: int) -> PageInfo:
    """Get diagnostic information about a page through the reader's cache."""
    page = reader.page_cache.get(pgno)
    header = page.header
    return PageInfo(
        pgno=page.pgno,
        page_type=page_type_name(header.page_type),
        level=header.level,
        entries=header.entries,
        prev_pgno=header.prev_pgno,
        next_pgno=header.next_pgno,
        hf_offset=header.hf_offset,
        is_leaf=page.is_leaf,
    )
