"""Enumerations shared across the resizer, settings and CLI."""

from enum import Enum

from PIL import Image


class ResamplingProfile(Enum):
    """Quality/speed tradeoff for the delegated resampling step.

    The profile never influences the computed target size; it only selects
    how the imaging library decodes and interpolates the source pixels.
    """

    HIGH_QUALITY = "high-quality"  # bicubic, colour-managed decode
    HIGH_SPEED = "high-speed"  # nearest neighbour, draft decode, no ICC

    @property
    def resample(self) -> Image.Resampling:
        """Pillow filter used to resample to the target size."""
        if self is ResamplingProfile.HIGH_QUALITY:
            return Image.Resampling.BICUBIC
        return Image.Resampling.NEAREST

    @property
    def color_managed(self) -> bool:
        """Whether embedded ICC profiles are converted to sRGB on decode."""
        return self is ResamplingProfile.HIGH_QUALITY

    @property
    def allow_draft(self) -> bool:
        """Whether the JPEG decoder may downscale in the DCT domain."""
        return self is ResamplingProfile.HIGH_SPEED


class OutputFormat(Enum):
    """Encoders the resizer can write."""

    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"
    SOURCE = "source"  # re-encode in whatever format the source was

    @property
    def pil_format(self) -> str | None:
        """Pillow format name, or None when the source format is kept."""
        if self is OutputFormat.SOURCE:
            return None
        return self.value.upper()
