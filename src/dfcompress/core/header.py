from __future__ import annotations

from dfcompress.core.u32io import ByteSink, ByteSource, read_u32, write_u32
from dfcompress.errors import CompressionUnknown, VersionIsZero

# Header
# [VERSION(u32 LE, != 0)|COMPRESSION(u32 LE)]
HEADER_SIZE = 8

COMPRESSION_NONE = 0
COMPRESSION_ZLIB = 1


def read_header(stream: ByteSource) -> tuple[int, int]:
    """Return (version, compression) after validating both fields."""
    version = read_u32(stream)
    if version == 0:
        raise VersionIsZero()
    compression = read_u32(stream)
    if compression > COMPRESSION_ZLIB:
        raise CompressionUnknown(compression)
    return version, compression


def write_header(stream: ByteSink, version: int, compression: int) -> None:
    # no validation: the caller always picks the output tag
    write_u32(stream, version)
    write_u32(stream, compression)
