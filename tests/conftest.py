"""
Synthetic .is2 files for the tests.
"""
import zipfile

import numpy as np
import pytest

FRAME_SHAPE = (240, 320)
VISUAL_SHAPE = (480, 640)
# Sentinel position that puts the end of the visual block exactly at the audio offset (784080).
LEGACY_SENTINEL = 196
FAKE_JPEG = b"\xff\xd8\xff\xe0fake-jpeg-payload\xff\xd9"


def legacy_bytes(counts=None, visual=None, audio=b"", sentinel=LEGACY_SENTINEL):
    """Build a legacy .is2 image: zeros, 20 x 0xFF ending at `sentinel`, then IR, visual, audio."""
    if counts is None:
        counts = np.full(FRAME_SHAPE, 1000, dtype=np.uint16)
    if visual is None:
        visual = np.zeros(VISUAL_SHAPE, dtype=np.uint16)
    buf = bytearray(sentinel - 20) + b"\xff" * 20
    buf += bytes(15828)
    buf += np.asarray(counts, dtype="<u2").tobytes()
    buf += bytes(sentinel + 169484 - len(buf))
    buf += np.asarray(visual, dtype="<u2").tobytes()
    buf += audio
    return bytes(buf)


def container_bytes_to(path, counts=None, ir_data=None, visual=FAKE_JPEG, extra=None, compression=zipfile.ZIP_STORED):
    """Write a ZIP based .is2 to path."""
    if counts is None:
        counts = np.full(FRAME_SHAPE, 20000, dtype=np.uint16)
    if ir_data is None:
        ir_data = bytes(640) + np.asarray(counts, dtype="<u2").tobytes()
    with zipfile.ZipFile(path, "w", compression=compression) as z:
        z.writestr("ImageProperties.json", "{}")
        z.writestr("Images/Main/IR.data", ir_data)
        if visual is not None:
            z.writestr("Images/Main/028001E0.jpg", visual)
        for name, data in (extra or {}).items():
            z.writestr(name, data)
    return path


@pytest.fixture
def make_legacy(tmp_path):
    def _make(name="IR000001.IS2", **kwargs):
        path = tmp_path / name
        path.write_bytes(legacy_bytes(**kwargs))
        return path
    return _make


@pytest.fixture
def make_container(tmp_path):
    def _make(name="IR000002.IS2", **kwargs):
        return container_bytes_to(tmp_path / name, **kwargs)
    return _make


@pytest.fixture
def private_tempdir(tmp_path, monkeypatch):
    """Point tempfile at an empty directory so leftovers can be detected."""
    import tempfile

    d = tmp_path / "tmp"
    d.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(d))
    return d


def corrupt_member_data(path, entry, length=50):
    """XOR `length` bytes in the middle of entry's compressed data inside the ZIP at path."""
    with zipfile.ZipFile(path) as z:
        info = z.getinfo(entry)
    buf = bytearray(path.read_bytes())
    header = info.header_offset
    name_len = int.from_bytes(buf[header + 26:header + 28], "little")
    extra_len = int.from_bytes(buf[header + 28:header + 30], "little")
    start = header + 30 + name_len + extra_len + info.compress_size // 2
    for i in range(start, start + length):
        buf[i] ^= 0xFF
    path.write_bytes(bytes(buf))
    return path
