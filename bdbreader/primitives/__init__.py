"""
Primitive types and constants used throughout the reader.

This module contains basic types that have no dependencies on other parts
of the package, avoiding circular imports.
"""

from .lsn import LSN
from .page_type import PageType, page_type_name
from .access_method import (
    AccessMethod,
    BTREE_MAGIC,
    HASH_MAGIC,
    QUEUE_MAGIC,
    HEAP_MAGIC,
)

__all__ = [
    "LSN",
    "PageType",
    "page_type_name",
    "AccessMethod",
    "BTREE_MAGIC",
    "HASH_MAGIC",
    "QUEUE_MAGIC",
    "HEAP_MAGIC",
]
