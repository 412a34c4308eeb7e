"""Exception classes for dynamic media path building and media validation."""

from __future__ import annotations


class DynamicMediaError(Exception):
    """Base class for errors raised by the dynmedia package."""


class PathEncodingError(DynamicMediaError, RuntimeError):
    """Dynamic media object could not be percent-encoded.

    There is no fallback representation for the path, so this is never
    handled inside the package.
    """

    def __init__(self, segment: str, cause: Exception) -> None:
        super().__init__(f"Unsupported encoding for path segment {segment!r}: {cause}")
        self.segment = segment


class InvalidCropError(DynamicMediaError, ValueError):
    """Crop parameter could not be parsed."""


class UnknownMediaFormatError(DynamicMediaError, ValueError):
    """Media format name is not defined in the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown media format: {name}")
        self.name = name
