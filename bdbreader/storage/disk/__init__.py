from .stream_reader import StreamReader, StreamStats

__all__ = ["StreamReader", "StreamStats"]
