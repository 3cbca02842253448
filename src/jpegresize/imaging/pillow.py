"""Pillow implementation of the scale-to-fit resize pipeline."""

from __future__ import annotations

import logging
from typing import Final

from PIL import Image

from jpegresize.common.enums import ResamplingProfile
from jpegresize.imaging import codec
from jpegresize.imaging.codec import EncodeOptions
from jpegresize.imaging.dimensions import BoundingBox, compute_target_size
from jpegresize.imaging.protocols import ImageResizer

logger: Final = logging.getLogger(__name__)


class PillowResizer(ImageResizer):
    """Scale-to-fit resizer backed by Pillow.

    Decoding, resampling and encoding are all delegated to Pillow; this
    class only computes the target size and picks the library settings
    the requested profile calls for.
    """

    def __init__(self, heic: bool = False) -> None:
        """Initialize the resizer.

        Args:
            heic: Decode every input as HEIC/HEIF (needs pillow-heif)
        """
        self.heic = heic

    def resize(
        self,
        data: bytes,
        box: BoundingBox,
        profile: ResamplingProfile = ResamplingProfile.HIGH_QUALITY,
        options: EncodeOptions | None = None,
    ) -> bytes:
        """Resize encoded image bytes to fit ``box``.

        Args:
            data: Encoded source image
            box: Bounding box to fit within
            profile: Resampling quality/speed tradeoff
            options: Encoder parameters (defaults to JPEG quality 85)

        Returns:
            Encoded bytes of the resized image

        Raises:
            InvalidDimensionsError: If the target size truncates to zero
            DecodeError: If the source cannot be decoded
            EncodeError: If the output cannot be encoded
            UnsupportedFormatError: If a required codec is unavailable
        """
        options = options or EncodeOptions()

        with codec.open_image(data, heic=self.heic) as source:
            source_format = source.format
            source_info = dict(source.info)
            target = compute_target_size(*source.size, *box.as_tuple())

            if profile.allow_draft:
                codec.apply_draft(source, target)
            codec.load_image(source)

            resized = self._resample(source, target, profile)

        fmt = codec.resolve_format(source_format, options.output_format)
        output = codec.prepare_for_format(resized, fmt)

        dpi = options.dpi or source_info.get("dpi")
        icc = None if profile.color_managed else source_info.get("icc_profile")
        encoded = codec.encode(output, fmt, quality=options.quality, dpi=dpi, icc_profile=icc)
        logger.debug(
            "Resized %s -> %dx%d %s (%s, %d bytes)",
            source_format,
            *target,
            fmt,
            profile.value,
            len(encoded),
        )
        return encoded

    def resize_image(
        self,
        image: Image.Image,
        box: BoundingBox,
        profile: ResamplingProfile = ResamplingProfile.HIGH_QUALITY,
    ) -> Image.Image:
        """Resize an already decoded image to fit ``box``."""
        target = compute_target_size(*image.size, *box.as_tuple())
        return self._resample(image, target, profile)

    @staticmethod
    def _resample(
        image: Image.Image, target: tuple[int, int], profile: ResamplingProfile
    ) -> Image.Image:
        if profile.color_managed:
            image = codec.to_srgb(image)
        return image.resize(target, resample=profile.resample)
