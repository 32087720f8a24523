"""Errors raised while decoding and converting .is2 files."""

from typing import Optional

GITHUB_MESSAGE = (
    " This file layout is not recognised. Please open an issue or submit a pull request "
    "on the project GitHub repository with your camera model and a sample file so support can be added."
)


class IS2Error(Exception):
    """Base class; carries the file or artifact path and the stage that failed."""

    def __init__(self, message: str, path: Optional[str] = None, stage: Optional[str] = None):
        self.path = None if path is None else str(path)
        self.stage = stage
        super().__init__(message)

    def __str__(self):
        text = super().__str__()
        if self.stage:
            text = f"[{self.stage}] {text}"
        if self.path:
            text = f"{text} ({self.path})"
        return text


class FormatNotDetectedError(IS2Error):
    """The file is structurally not the variant that was tried; the next variant may be tried."""


class OffsetNotFoundError(FormatNotDetectedError):
    """Legacy sentinel run of 0xFF bytes not found. Unknown file structure."""


class FormatUnrecognizedError(IS2Error, ValueError):
    """Neither the Container nor the Legacy variant matched."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message + GITHUB_MESSAGE, path=path, stage="detect")


class UnsafeArchiveEntryError(IS2Error):
    """An archive member would be extracted outside the destination directory."""

    def __init__(self, entry: str, path: Optional[str] = None):
        self.entry = entry
        super().__init__(f"Unsafe archive entry: {entry!r}", path=path, stage="extract")


class IS2IOError(IS2Error, OSError):
    """Read, write or seek failure (including truncated data blocks)."""


class EncodeError(IS2Error):
    """The image encoder failed."""
