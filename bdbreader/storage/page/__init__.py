from .page import Page, PageHeader
from .page_cache import PageCache
from .page_info import PageInfo, describe_page

__all__ = ["Page", "PageHeader", "PageCache", "PageInfo", "describe_page"]
