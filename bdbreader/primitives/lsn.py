import struct
from dataclasses import dataclass


@dataclass(frozen=True)
class LSN:
    """
    Log sequence number.

    A write-ahead-log marker left in every page header. It carries no
    meaning for read-only decoding but is kept so headers decode in full.
    """
    file: int
    offset: int

    FORMAT = '<II'
    SIZE = 8

    @classmethod
    def from_bytes(cls, data: bytes) -> 'LSN':
        file_id, offset = struct.unpack(cls.FORMAT, data[:cls.SIZE])
        return cls(file_id, offset)

    def __str__(self) -> str:
        return f"LSN({self.file}/{self.offset})"
