"""Little-endian u32 fields and bounded reads over byte streams."""

from __future__ import annotations

from typing import Protocol

from dfcompress.errors import IoError, UnexpectedEof, io_errors

U32_MAX = 0xFFFFFFFF


class ByteSource(Protocol):
    def read(self, size: int = -1, /) -> bytes: ...


class ByteSink(Protocol):
    def write(self, data: bytes, /) -> int | None: ...


def _read_some(stream: ByteSource, n: int) -> bytes:
    """Read up to ``n`` bytes, looping over short reads; stops early only at EOF."""
    buf = bytearray()
    with io_errors():
        while len(buf) < n:
            b = stream.read(n - len(buf))
            if not b:
                break
            buf += b
    return bytes(buf)


def read_exact(stream: ByteSource, n: int) -> bytes:
    b = _read_some(stream, n)
    if len(b) != n:
        raise UnexpectedEof()
    return b


def read_u32(stream: ByteSource) -> int:
    return int.from_bytes(read_exact(stream, 4), "little")


def read_u32_or_eof(stream: ByteSource) -> int | None:
    """Like read_u32, but a stream already at EOF yields None.

    A partially read field (1..3 bytes) is still UnexpectedEof.
    """
    b = _read_some(stream, 4)
    if not b:
        return None
    if len(b) != 4:
        raise UnexpectedEof()
    return int.from_bytes(b, "little")


def write_all(stream: ByteSink, data: bytes) -> None:
    """Write all of ``data``, looping over short writes (raw sinks, pipes)."""
    view = memoryview(data)
    with io_errors():
        while view:
            n = stream.write(view)
            if n is None:
                break
            if n == 0:
                raise IoError("write accepted 0 bytes")
            view = view[n:]


def write_u32(stream: ByteSink, value: int) -> None:
    if not (0 <= value <= U32_MAX):
        raise ValueError(f"u32 fuori range: {value}")
    write_all(stream, int(value).to_bytes(4, "little"))


class BoundedReader:
    """Read view over ``stream`` that never goes past ``limit`` bytes.

    ``truncated`` becomes True when the underlying stream ends before the
    limit is reached.
    """

    def __init__(self, stream: ByteSource, limit: int):
        if limit < 0:
            raise ValueError("limit negativo")
        self._stream = stream
        self.limit = limit
        self.consumed = 0
        self.truncated = False

    @property
    def remaining(self) -> int:
        return self.limit - self.consumed

    def read(self, size: int = -1) -> bytes:
        want = self.remaining if size is None or size < 0 else min(size, self.remaining)
        if want <= 0:
            return b""
        with io_errors():
            b = self._stream.read(want)
        if not b:
            self.truncated = True
            return b""
        self.consumed += len(b)
        return b

    def drain(self, block_size: int = 64 * 1024) -> int:
        """Discard the rest of the window; returns the number of bytes skipped."""
        skipped = 0
        while self.remaining > 0:
            b = self.read(block_size)
            if not b:
                break
            skipped += len(b)
        return skipped
