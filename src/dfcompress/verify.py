"""Stream inspection helpers.

Walks a save stream the same way ``dfuncompress`` does, but writes nothing:
every chunk is decompressed to validate it and measure its flat size.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from dfcompress.core.codec_zlib import BLOCK_SIZE, CodecZlib
from dfcompress.core.header import COMPRESSION_NONE, read_header
from dfcompress.core.u32io import BoundedReader, ByteSource, read_u32_or_eof
from dfcompress.errors import io_errors


@dataclass(frozen=True)
class ChunkInfo:
    comp_len: int
    flat_len: int


@dataclass
class StreamReport:
    version: int
    compression: int
    chunks: list[ChunkInfo] = field(default_factory=list)
    flat_bytes: int = 0

    @property
    def comp_bytes(self) -> int:
        return sum(c.comp_len for c in self.chunks)

    def render(self) -> str:
        kind = "raw" if self.compression == COMPRESSION_NONE else "chunked zlib"
        lines = [
            f"version     : {self.version}",
            f"compression : {self.compression} ({kind})",
        ]
        if self.compression != COMPRESSION_NONE:
            lines.append(f"chunks      : {len(self.chunks)}")
            lines.append(f"compressed  : {self.comp_bytes}")
        lines.append(f"flat body   : {self.flat_bytes}")
        return "\n".join(lines)


def inspect_stream(source: ByteSource) -> StreamReport:
    version, compression = read_header(source)
    rep = StreamReport(version=version, compression=compression)

    if compression == COMPRESSION_NONE:
        with io_errors():
            while True:
                b = source.read(BLOCK_SIZE)
                if not b:
                    break
                rep.flat_bytes += len(b)
        return rep

    codec = CodecZlib()
    while True:
        n = read_u32_or_eof(source)
        if n is None:
            break
        flat = codec.decompress_chunk(BoundedReader(source, n))
        rep.chunks.append(ChunkInfo(comp_len=n, flat_len=len(flat)))
        rep.flat_bytes += len(flat)
    return rep


def inspect_file(path: str | Path) -> StreamReport:
    with io_errors(), Path(path).open("rb") as f:
        return inspect_stream(f)
