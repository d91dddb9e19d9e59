from enum import Enum


BTREE_MAGIC = 0x053162
HASH_MAGIC = 0x061561
QUEUE_MAGIC = 0x042253
HEAP_MAGIC = 0x074582


class AccessMethod(Enum):
    """Storage organisations a database file can use."""
    BTREE = "btree"
    HASH = "hash"
    QUEUE = "queue"
    HEAP = "heap"

    @classmethod
    def from_magic(cls, magic: int) -> 'AccessMethod':
        """
        Identify the access method from a header magic number.

        Recno files share the btree magic and are told apart only by the
        metadata flags, so they report as BTREE here.

        Raises:
            KeyError: If the magic is not recognised
        """
        return _MAGIC_TO_METHOD[magic]


_MAGIC_TO_METHOD = {
    BTREE_MAGIC: AccessMethod.BTREE,
    HASH_MAGIC: AccessMethod.HASH,
    QUEUE_MAGIC: AccessMethod.QUEUE,
    HEAP_MAGIC: AccessMethod.HEAP,
}
