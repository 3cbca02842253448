"""Exception classes for image resizing.

This module defines a hierarchy of exception classes for the scale-to-fit
calculator and for failures reported by the imaging library while
decoding or encoding.
"""

from __future__ import annotations

from typing import Optional


class ResizeError(Exception):
    """Base class for every error raised while resizing an image."""


class InvalidDimensionsError(ResizeError):
    """Computed target dimensions are not positive.

    Raised when the source dimensions are degenerate or when the scale
    ratio truncates one side to zero (extreme aspect ratios). The
    condition is deterministic, so retrying with the same inputs cannot
    succeed; callers should pick another box or reject the source.
    """

    def __init__(
        self,
        source: tuple[int, int],
        box: tuple[int, int],
        target: Optional[tuple[int, int]] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            source: Source (width, height)
            box: Desired (width, height); height 0 means unconstrained
            target: Computed (width, height), if the ratio was computed
        """
        self.source = source
        self.box = box
        self.target = target
        if target is None:
            message = f"Source dimensions {source[0]}x{source[1]} are invalid"
        else:
            message = (
                f"Calculated dimensions {target[0]}x{target[1]} are invalid "
                f"(source {source[0]}x{source[1]}, box {box[0]}x{box[1]})"
            )
        super().__init__(message)


class _WrappedLibraryError(ResizeError):
    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        """Initialize with the imaging library's failure.

        Args:
            message: Description of the failure
            original_error: The original exception that was caught
        """
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class DecodeError(_WrappedLibraryError):
    """Raised when the source bytes cannot be decoded into an image."""


class EncodeError(_WrappedLibraryError):
    """Raised when the resized image cannot be encoded."""


class UnsupportedFormatError(_WrappedLibraryError):
    """Raised when the requested input or output format is unavailable."""


class SourceError(_WrappedLibraryError):
    """Raised when a source path or URL cannot be read."""


class OutputError(_WrappedLibraryError):
    """Raised when a resized image cannot be written to its destination."""
