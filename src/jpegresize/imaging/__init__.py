"""Imaging package - scale-to-fit calculator and the Pillow resize pipeline."""

from jpegresize.imaging.codec import EncodeOptions
from jpegresize.imaging.dimensions import (
    BoundingBox,
    Dimensions,
    compute_target_size,
    fit_within,
)
from jpegresize.imaging.errors import (
    DecodeError,
    EncodeError,
    InvalidDimensionsError,
    OutputError,
    ResizeError,
    SourceError,
    UnsupportedFormatError,
)
from jpegresize.imaging.pillow import PillowResizer
from jpegresize.imaging.protocols import ImageResizer

__all__ = [
    "BoundingBox",
    "DecodeError",
    "Dimensions",
    "EncodeError",
    "EncodeOptions",
    "ImageResizer",
    "InvalidDimensionsError",
    "OutputError",
    "PillowResizer",
    "ResizeError",
    "SourceError",
    "UnsupportedFormatError",
    "compute_target_size",
    "fit_within",
]
