"""Decode Fluke .is2 files: Container (ZIP with Images/Main/IR.data) and Legacy (raw binary) variants."""

import logging
import os
import shutil
import tempfile
import wave
import zlib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Optional, Union
from zipfile import BadZipFile, ZipFile

import numpy as np
from PIL import Image

from .exceptions import (
    FormatNotDetectedError,
    IS2IOError,
    OffsetNotFoundError,
    UnsafeArchiveEntryError,
)
from .models import RawFrame
from .render import save_image
from .utilities import rgb565_to_rgb888
from .variants import CONTAINER, FORMAT_VARIANTS, LEGACY, FormatVariant

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

AUDIO_SUFFIX = ".wav"
_COPY_CHUNK = 64 * 1024


def strip_is2_extension(name: str) -> str:
    """Base name without a trailing .is2 (any case)."""
    base = os.path.basename(name)
    if base.lower().endswith(".is2"):
        return base[:-4]
    return base


def find_sentinel_offset(data: bytes, run_length: int = 20, limit: int = 1000) -> int:
    """
    Return the offset just after the first run of >= run_length consecutive 0xFF bytes.

    The run counter resets on any other byte. Only the first `limit` bytes are scanned;
    raise OffsetNotFoundError if no run completes within them (or the data ends first).
    """
    count = 0
    for i, value in enumerate(data[:limit], start=1):
        if value == 0xFF:
            count += 1
        else:
            count = 0
        if count >= run_length:
            return i
    raise OffsetNotFoundError("Offset not found. Unknown file structure!", stage="sentinel")


def check_archive_members(archive: ZipFile, dest: PathLike) -> None:
    """Raise UnsafeArchiveEntryError if any member would resolve outside dest."""
    dest_root = os.path.realpath(dest)
    for name in archive.namelist():
        target = os.path.realpath(os.path.join(dest_root, name))
        if os.path.commonpath([dest_root, target]) != dest_root:
            raise UnsafeArchiveEntryError(name, path=archive.filename)


def safe_extract(archive: ZipFile, dest: PathLike) -> None:
    """Extract all members to dest; refuse the whole archive if any member escapes dest."""
    check_archive_members(archive, dest)
    archive.extractall(os.path.realpath(dest))


def write_pcm16_wav(source: BinaryIO, dest: PathLike, sample_rate: int = 8000) -> int:
    """
    Stream little-endian 16-bit samples from source (current position to EOF) into a mono WAV.

    A trailing odd byte is dropped. Returns the number of samples written.
    """
    samples = 0
    pending = b""
    with open(dest, "wb") as out, wave.open(out, "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        while True:
            chunk = source.read(_COPY_CHUNK)
            if not chunk:
                break
            chunk = pending + chunk
            usable = len(chunk) - (len(chunk) % 2)
            pending = chunk[usable:]
            wav.writeframes(chunk[:usable])
            samples += usable // 2
    return samples


def _frame_from_bytes(buf: bytes, variant: FormatVariant) -> RawFrame:
    counts = np.frombuffer(buf, dtype="<u2").astype(np.uint16).reshape(variant.height, variant.width)
    return RawFrame(counts=counts, variant=variant)


class _IS2Source(ABC):
    """Common scoped-resource behavior: use as a context manager, or call open()/close()."""

    variant: FormatVariant

    def __init__(self, file_path: PathLike):
        self.file_path = str(file_path)

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    @abstractmethod
    def open(self):
        ...

    @abstractmethod
    def close(self):
        ...

    @abstractmethod
    def read_frame(self) -> RawFrame:
        ...

    @abstractmethod
    def extract_visual(self, dest: PathLike) -> str:
        ...

    def extract_audio(self, dest: Optional[PathLike] = None) -> Optional[str]:
        """Only the Legacy variant carries audio."""
        return None


class ContainerParser(_IS2Source):
    """Parse ZIP based .is2: extract to a private temp dir, read IR.data, copy the JPEG photo."""

    def __init__(self, file_path: PathLike, variant: FormatVariant = FORMAT_VARIANTS[CONTAINER]):
        super().__init__(file_path)
        self.variant = variant
        self.temp_dir = None
        self._tmp = None

    def open(self):
        """Detect the container structure and extract it. Raises FormatNotDetectedError if not a container."""
        try:
            archive = ZipFile(self.file_path, "r")
        except BadZipFile as e:
            raise FormatNotDetectedError(f"Not a ZIP archive: {e}", path=self.file_path, stage="detect") from e
        with archive:
            self._tmp = tempfile.TemporaryDirectory(prefix=f"temp_{strip_is2_extension(self.file_path)}_")
            self.temp_dir = self._tmp.name
            try:
                self._extract(archive)
            except BaseException:
                self.close()
                raise
        logger.debug("Extracted %s to %s", self.file_path, self.temp_dir)
        return self

    def _extract(self, archive: ZipFile):
        # Traversal check first: an unsafe archive is fatal, never "not a container".
        check_archive_members(archive, self.temp_dir)
        if self.variant.ir_entry not in archive.namelist():
            raise FormatNotDetectedError(
                f"Archive has no {self.variant.ir_entry} entry", path=self.file_path, stage="detect"
            )
        try:
            safe_extract(archive, self.temp_dir)
        except (BadZipFile, OSError, EOFError, NotImplementedError, zlib.error) as e:
            raise IS2IOError(f"Cannot extract archive: {e}", path=self.file_path, stage="extract") from e

    def close(self):
        if self._tmp is not None:
            self._tmp.cleanup()
            self._tmp = None
            self.temp_dir = None

    def _entry_path(self, entry: str) -> str:
        return os.path.join(self.temp_dir, *entry.split("/"))

    def read_frame(self) -> RawFrame:
        """Read the 320x240 uint16 frame at offset 640 of IR.data."""
        ir_data_path = self._entry_path(self.variant.ir_entry)
        try:
            with open(ir_data_path, "rb") as f:
                f.seek(self.variant.ir_offset)
                buf = f.read(self.variant.ir_block_size)
        except OSError as e:
            raise IS2IOError(f"Cannot read IR data: {e}", path=ir_data_path, stage="ir") from e
        if len(buf) != self.variant.ir_block_size:
            raise IS2IOError(
                f"IR data truncated: {len(buf)} of {self.variant.ir_block_size} bytes",
                path=self.variant.ir_entry,
                stage="ir",
            )
        return _frame_from_bytes(buf, self.variant)

    def extract_visual(self, dest: PathLike) -> str:
        """Copy the embedded JPEG photo verbatim."""
        src = self._entry_path(self.variant.visual_entry)
        try:
            shutil.copyfile(src, dest)
        except OSError as e:
            raise IS2IOError(f"Can't copy visual image: {e}", path=str(dest), stage="visual") from e
        logger.info("Visual image written: %s", dest)
        return str(dest)


class LegacyParser(_IS2Source):
    """Parse raw binary .is2: blocks at fixed offsets from a run of 0xFF bytes near the file start."""

    def __init__(self, file_path: PathLike, variant: FormatVariant = FORMAT_VARIANTS[LEGACY]):
        super().__init__(file_path)
        self.variant = variant
        self.offset = None
        self._file = None

    def open(self):
        """Open the file and locate the sentinel. Raises OffsetNotFoundError if not a legacy file."""
        try:
            self._file = open(self.file_path, "rb")
            head = self._file.read(self.variant.sentinel_limit)
        except OSError as e:
            self.close()
            raise IS2IOError(f"Error while opening file: {e}", path=self.file_path, stage="open") from e
        try:
            self.offset = find_sentinel_offset(head, self.variant.sentinel_run, self.variant.sentinel_limit)
        except OffsetNotFoundError as e:
            self.close()
            e.path = self.file_path
            raise
        logger.debug("Sentinel offset %d in %s", self.offset, self.file_path)
        return self

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None

    def _read_block(self, offset: int, size: int, stage: str) -> bytes:
        try:
            self._file.seek(offset)
            buf = self._file.read(size)
        except OSError as e:
            raise IS2IOError(f"Error while reading file: {e}", path=self.file_path, stage=stage) from e
        if len(buf) != size:
            raise IS2IOError(
                f"File corrupt: {stage} block at offset {offset} truncated ({len(buf)} of {size} bytes)",
                path=self.file_path,
                stage=stage,
            )
        return buf

    def read_frame(self) -> RawFrame:
        buf = self._read_block(self.offset + self.variant.ir_offset, self.variant.ir_block_size, "ir")
        return _frame_from_bytes(buf, self.variant)

    def read_visual(self) -> np.ndarray:
        """Decode the RGB565 photo to an RGB888 array of shape (480, 640, 3)."""
        width, height = self.variant.visual_size
        buf = self._read_block(self.offset + self.variant.visual_offset, width * height * 2, "visual")
        raw = np.frombuffer(buf, dtype="<u2").reshape(height, width)
        return rgb565_to_rgb888(raw)

    def extract_visual(self, dest: PathLike) -> str:
        save_image(Image.fromarray(self.read_visual(), "RGB"), dest, stage="visual")
        logger.info("Visual image written: %s", dest)
        return str(dest)

    def extract_audio(self, dest: Optional[PathLike] = None) -> Optional[str]:
        """
        Write trailing PCM16 audio (from audio_offset to EOF) to a mono 8 kHz WAV.

        Default destination is '<input>.wav'. Returns None when the file carries no audio
        or when writing fails; a failure here does not affect the other artifacts.
        """
        dest = str(dest) if dest else self.file_path + AUDIO_SUFFIX
        try:
            size = os.fstat(self._file.fileno()).st_size
            if size <= self.variant.audio_offset:
                return None
            self._file.seek(self.variant.audio_offset)
            samples = write_pcm16_wav(self._file, dest, self.variant.audio_sample_rate)
        except OSError as e:
            logger.warning("Audio extraction aborted (%s): %s", dest, e)
            if os.path.exists(dest):
                os.remove(dest)
            return None
        logger.info("Audio written: %s (%d samples)", dest, samples)
        return dest
