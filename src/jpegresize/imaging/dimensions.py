"""Scale-to-fit dimension calculation."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Final

from jpegresize.imaging.errors import InvalidDimensionsError

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dimensions:
    """Pixel size of an image."""

    width: int
    height: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class BoundingBox:
    """Maximum output size.

    A ``desired_height`` of 0 leaves the height unconstrained, so only the
    width limits the result.
    """

    desired_width: int
    desired_height: int = 0

    def __post_init__(self) -> None:
        if self.desired_width <= 0:
            raise ValueError(f"desired_width must be positive, got {self.desired_width}")
        if self.desired_height < 0:
            raise ValueError(f"desired_height cannot be negative, got {self.desired_height}")

    @property
    def height_constrained(self) -> bool:
        return self.desired_height > 0

    def as_tuple(self) -> tuple[int, int]:
        return (self.desired_width, self.desired_height)


def compute_target_size(
    source_width: int, source_height: int, desired_width: int, desired_height: int
) -> tuple[int, int]:
    """Calculate dimensions that fit the box while preserving aspect ratio.

    Args:
        source_width: Source image width
        source_height: Source image height
        desired_width: Maximum output width
        desired_height: Maximum output height, or 0 to fit by width only

    Returns:
        Tuple of (width, height), each truncated toward zero

    Raises:
        InvalidDimensionsError: If the source or the result is not positive
    """
    source = (source_width, source_height)
    box = (desired_width, desired_height)
    if source_width <= 0 or source_height <= 0:
        raise InvalidDimensionsError(source, box)

    # Exact rationals: width-bound results equal desired_width, never one less
    ratio = Fraction(desired_width, source_width)
    if desired_height > 0:
        ratio = min(ratio, Fraction(desired_height, source_height))

    target = (math.floor(source_width * ratio), math.floor(source_height * ratio))
    if target[0] <= 0 or target[1] <= 0:
        raise InvalidDimensionsError(source, box, target)

    logger.debug(
        "Fit %dx%d into %dx%d -> %dx%d (ratio %.6f)", *source, *box, *target, float(ratio)
    )
    return target


def fit_within(source: Dimensions, box: BoundingBox) -> Dimensions:
    """Value-object form of :func:`compute_target_size`."""
    width, height = compute_target_size(
        source.width, source.height, box.desired_width, box.desired_height
    )
    return Dimensions(width, height)
