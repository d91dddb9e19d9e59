"""Configuration for the database reader."""

from dataclasses import dataclass


@dataclass
class ReaderConfig:
    """Tunable parameters for a BTree reader.

    Attributes:
        max_depth: Maximum number of pages a single descent may visit
        detect_cycles: Whether a descent tracks visited pages
        key_encoding: Encoding applied to str keys before comparison
    """

    max_depth: int = 64
    detect_cycles: bool = True
    key_encoding: str = "utf-8"

    def __post_init__(self):
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")
