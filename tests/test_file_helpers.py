from __future__ import annotations

from pathlib import Path

import pytest

from dfcompress import compress_file, decompress_file
from dfcompress.errors import CompressionUnknown


def test_file_roundtrip(tmp_path: Path) -> None:
    raw = tmp_path / "region.sav"
    comp = tmp_path / "region.sav.z"
    back = tmp_path / "region.back"
    raw.write_bytes(b"\x10\x00\x00\x00\x00\x00\x00\x00" + b"save data" * 5000)

    st = compress_file(raw, comp)
    assert st.chunks == 3
    st2 = decompress_file(comp, back)
    assert st2.flat_bytes == 45000
    assert back.read_bytes() == raw.read_bytes()


def test_failed_conversion_leaves_no_output(tmp_path: Path) -> None:
    bad = tmp_path / "bad.sav"
    out = tmp_path / "out.sav"
    out.write_bytes(b"previous")
    bad.write_bytes(b"\x01\x00\x00\x00\x05\x00\x00\x00")

    with pytest.raises(CompressionUnknown):
        compress_file(bad, out)
    assert out.read_bytes() == b"previous"
    assert not (tmp_path / "out.sav.part").exists()
