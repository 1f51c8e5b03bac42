from __future__ import annotations

import logging
import zlib

from dfcompress.core.u32io import BoundedReader
from dfcompress.errors import IoError, UnexpectedEof, io_errors

logger = logging.getLogger(__name__)

BLOCK_SIZE = 64 * 1024


class CodecZlib:
    """zlib/DEFLATE chunk codec over bounded windows (no external deps).

    Every chunk is one complete zlib stream, decodable on its own.
    """

    codec_id: str = "zlib"

    def __init__(self, level: int = zlib.Z_DEFAULT_COMPRESSION):
        if not (-1 <= level <= 9):
            raise ValueError(f"zlib level must be -1..9, got {level}")
        self.level = level

    def compress_window(self, source: BoundedReader) -> tuple[int, bytes]:
        """Compress the whole window; return (bytes consumed, compressed stream)."""
        c = zlib.compressobj(self.level)
        out = bytearray()
        with io_errors():
            while True:
                b = source.read(BLOCK_SIZE)
                if not b:
                    break
                out += c.compress(b)
            out += c.flush()
        return source.consumed, bytes(out)

    def decompress_chunk(self, source: BoundedReader) -> bytes:
        """Decompress one chunk without reading past its boundary."""
        d = zlib.decompressobj()
        out = bytearray()
        with io_errors():
            while not d.eof:
                b = source.read(BLOCK_SIZE)
                if not b:
                    break
                out += d.decompress(b)
            if not d.eof:
                out += d.flush()

        if source.truncated:
            raise UnexpectedEof()
        if not d.eof:
            raise IoError("incomplete zlib stream in chunk")

        trailing = len(d.unused_data) + source.drain()
        if source.truncated:
            raise UnexpectedEof()
        if trailing:
            logger.debug("chunk: skipped %d bytes after end of zlib stream", trailing)
        return bytes(out)
