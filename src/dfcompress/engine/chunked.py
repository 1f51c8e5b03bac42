"""Chunked save-stream conversions.

Layout (all fields u32 little-endian):

  [VERSION|COMPRESSION=0] + flat body
  [VERSION|COMPRESSION=1] + repeat{ [CHUNK_LEN] + CHUNK_LEN bytes of one zlib stream }

The chunk sequence has no count and no trailer: it ends with the input.
Each chunk holds at most CHUNK_SIZE bytes of flat body.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from dfcompress.core.codec_zlib import BLOCK_SIZE, CodecZlib
from dfcompress.core.header import COMPRESSION_NONE, COMPRESSION_ZLIB, HEADER_SIZE, read_header, write_header
from dfcompress.core.u32io import BoundedReader, ByteSink, ByteSource, read_u32_or_eof, write_all, write_u32
from dfcompress.errors import io_errors

logger = logging.getLogger(__name__)

# Fixed by the legacy format.
CHUNK_SIZE = 20000


@dataclass
class ConversionStats:
    version: int
    compression_in: int
    compression_out: int
    passthrough: bool = False
    chunks: int = 0
    flat_bytes: int = 0
    bytes_written: int = 0


def _copy(source: ByteSource, sink: ByteSink) -> int:
    n = 0
    with io_errors():
        while True:
            b = source.read(BLOCK_SIZE)
            if not b:
                break
            write_all(sink, b)
            n += len(b)
    return n


def dfuncompress(source: ByteSource, sink: ByteSink, *, codec: CodecZlib | None = None) -> ConversionStats:
    """Rewrite a save stream in raw form (compression=0)."""
    codec = codec or CodecZlib()
    version, compression = read_header(source)
    write_header(sink, version, COMPRESSION_NONE)
    st = ConversionStats(version=version, compression_in=compression, compression_out=COMPRESSION_NONE)
    st.bytes_written = HEADER_SIZE

    if compression == COMPRESSION_NONE:
        st.passthrough = True
        st.flat_bytes = _copy(source, sink)
        st.bytes_written += st.flat_bytes
    else:
        while True:
            n = read_u32_or_eof(source)
            if n is None:
                break
            data = codec.decompress_chunk(BoundedReader(source, n))
            write_all(sink, data)
            st.chunks += 1
            st.flat_bytes += len(data)
            st.bytes_written += len(data)
            logger.debug("chunk %d: %d -> %d bytes", st.chunks, n, len(data))

    logger.info(
        "dfuncompress: version=%d compression=%d chunks=%d flat=%d passthrough=%s",
        version,
        compression,
        st.chunks,
        st.flat_bytes,
        st.passthrough,
    )
    return st


def dfcompress(source: ByteSource, sink: ByteSink, *, codec: CodecZlib | None = None) -> ConversionStats:
    """Rewrite a save stream in chunked form (compression=1)."""
    codec = codec or CodecZlib()
    version, compression = read_header(source)
    write_header(sink, version, COMPRESSION_ZLIB)
    st = ConversionStats(version=version, compression_in=compression, compression_out=COMPRESSION_ZLIB)
    st.bytes_written = HEADER_SIZE

    if compression == COMPRESSION_ZLIB:
        # already chunked: no double compression
        st.passthrough = True
        st.bytes_written += _copy(source, sink)
    else:
        while True:
            consumed, comp = codec.compress_window(BoundedReader(source, CHUNK_SIZE))
            if consumed == 0:
                break
            write_u32(sink, len(comp))
            write_all(sink, comp)
            st.chunks += 1
            st.flat_bytes += consumed
            st.bytes_written += 4 + len(comp)
            logger.debug("chunk %d: %d -> %d bytes", st.chunks, consumed, len(comp))

    logger.info(
        "dfcompress: version=%d compression=%d chunks=%d flat=%d passthrough=%s",
        version,
        compression,
        st.chunks,
        st.flat_bytes,
        st.passthrough,
    )
    return st


@contextmanager
def atomic_output(output_path: str | Path) -> Iterator[BinaryIO]:
    """Open ``output_path.part`` for writing; move it into place only on success."""
    out = Path(output_path)
    part = out.with_name(out.name + ".part")
    try:
        with io_errors():
            fout = part.open("wb")
        with fout:
            yield fout
        with io_errors():
            part.replace(out)
    except BaseException:
        part.unlink(missing_ok=True)
        raise


def _convert_file(fn, input_path: str | Path, output_path: str | Path, codec: CodecZlib | None) -> ConversionStats:
    with io_errors(), Path(input_path).open("rb") as fin, atomic_output(output_path) as fout:
        return fn(fin, fout, codec=codec)


def compress_file(input_path: str | Path, output_path: str | Path, codec: CodecZlib | None = None) -> ConversionStats:
    return _convert_file(dfcompress, input_path, output_path, codec)


def decompress_file(input_path: str | Path, output_path: str | Path, codec: CodecZlib | None = None) -> ConversionStats:
    return _convert_file(dfuncompress, input_path, output_path, codec)
