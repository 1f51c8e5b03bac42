"""dfcompress: convert legacy save streams between raw and chunked-zlib form."""

from __future__ import annotations

from dfcompress.engine.chunked import CHUNK_SIZE, compress_file, decompress_file, dfcompress, dfuncompress
from dfcompress.errors import CompressionUnknown, DFCompressError, IoError, UnexpectedEof, VersionIsZero

__version__ = "0.1.0"

__all__ = [
    "CHUNK_SIZE",
    "CompressionUnknown",
    "DFCompressError",
    "IoError",
    "UnexpectedEof",
    "VersionIsZero",
    "compress_file",
    "decompress_file",
    "dfcompress",
    "dfuncompress",
]
