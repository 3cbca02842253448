"""Decoding and encoding through Pillow.

Everything here is a thin wrapper around the imaging library: decode
failures, colour transforms and encoder errors are translated into the
:mod:`jpegresize.imaging.errors` hierarchy, nothing more.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Any, Final, cast

from PIL import Image, ImageCms, JpegImagePlugin, UnidentifiedImageError

from jpegresize.common.enums import OutputFormat
from jpegresize.imaging.errors import DecodeError, EncodeError, UnsupportedFormatError

logger: Final = logging.getLogger(__name__)

# Modes each encoder can store without conversion
_NATIVE_MODES: Final[dict[str, tuple[str, ...]]] = {
    "JPEG": ("L", "RGB", "CMYK"),
    "WEBP": ("RGB", "RGBA"),
    "PNG": ("1", "L", "LA", "I", "P", "RGB", "RGBA"),
}
_QUALITY_FORMATS: Final = ("JPEG", "WEBP")
# Alpha-carrying modes and the colour-only mode ICC transforms run on
_ALPHA_MODES: Final[dict[str, str]] = {"RGBA": "RGB", "LA": "L"}


@dataclass(frozen=True)
class EncodeOptions:
    """Encoder parameters for the resized output.

    Attributes:
        output_format: Encoder to use (SOURCE keeps the input format)
        quality: Encoder quality 1-100, or None for the encoder default
        dpi: Resolution to write, or None to copy the source resolution
    """

    output_format: OutputFormat = OutputFormat.JPEG
    quality: int | None = 85
    dpi: tuple[int, int] | None = None

    def __post_init__(self) -> None:
        if self.quality is not None and not 1 <= self.quality <= 100:
            raise ValueError(f"quality must be between 1 and 100, got {self.quality}")


def _register_heif() -> None:
    try:
        from pillow_heif import register_heif_opener  # type: ignore[import-not-found]
    except ImportError as exc:
        raise UnsupportedFormatError(
            "HEIC input requires the pillow-heif package (install jpeg-resize[heic])", exc
        ) from exc
    register_heif_opener()


def open_image(data: bytes, heic: bool = False) -> Image.Image:
    """Open encoded bytes without decoding the pixel data yet.

    Args:
        data: Encoded image bytes
        heic: Treat the input as HEIC/HEIF

    Returns:
        Lazily loaded Pillow image; call :func:`load_image` before use

    Raises:
        DecodeError: If the bytes are not a recognised image
        UnsupportedFormatError: If HEIC support is not installed
    """
    if heic:
        _register_heif()
    try:
        if heic:
            return Image.open(io.BytesIO(data), formats=["HEIF"])
        return Image.open(io.BytesIO(data))
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Unable to identify image data: {exc}", exc) from exc


def apply_draft(image: Image.Image, size: tuple[int, int]) -> None:
    """Let the JPEG decoder downscale by a power of two, never below ``size``."""
    if not isinstance(image, JpegImagePlugin.JpegImageFile):
        return
    original = image.size
    image.draft(None, size)
    if image.size != original:
        logger.debug("Draft decode %dx%d -> %dx%d", *original, *image.size)


def load_image(image: Image.Image) -> Image.Image:
    """Decode and validate all pixel data."""
    try:
        image.load()
    except (OSError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Unable to decode image data: {exc}", exc) from exc
    return image


def to_srgb(image: Image.Image) -> Image.Image:
    """Convert an image with an embedded ICC profile to sRGB.

    Images without a profile are returned unchanged. A profile that lcms
    cannot use is logged and ignored. An alpha channel is carried over
    untouched; only the colour bands are transformed.
    """
    icc = image.info.get("icc_profile")
    if not icc:
        return image

    alpha = None
    colour = image
    if image.mode in _ALPHA_MODES:
        alpha = image.getchannel("A")
        colour = image.convert(_ALPHA_MODES[image.mode])

    try:
        source_profile = ImageCms.ImageCmsProfile(io.BytesIO(icc))
        srgb = ImageCms.createProfile("sRGB")
        converted = cast(
            Image.Image,
            ImageCms.profileToProfile(colour, source_profile, srgb, outputMode="RGB"),
        )
    except (ImageCms.PyCMSError, OSError, ValueError) as exc:
        logger.warning("Ignoring unusable ICC profile: %s", exc)
        return image

    if alpha is not None:
        converted.putalpha(alpha)
    logger.debug("Converted %s image to sRGB", image.mode)
    return converted


def resolve_format(source_format: str | None, output_format: OutputFormat) -> str:
    """Return the Pillow format name to encode with."""
    fmt = output_format.pil_format or source_format
    if fmt is None:
        raise UnsupportedFormatError("Source format is unknown; choose an explicit output format")
    return fmt


def prepare_for_format(image: Image.Image, fmt: str) -> Image.Image:
    """Convert ``image`` to a mode the encoder for ``fmt`` can store."""
    native = _NATIVE_MODES.get(fmt)
    if native is None or image.mode in native:
        return image
    has_alpha = image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info
    target = "RGBA" if has_alpha and "RGBA" in native else "RGB"
    logger.debug("Converting %s -> %s for %s output", image.mode, target, fmt)
    return image.convert(target)


def encode(
    image: Image.Image,
    fmt: str,
    quality: int | None = None,
    dpi: tuple[int, int] | None = None,
    icc_profile: bytes | None = None,
) -> bytes:
    """Encode an image to bytes.

    Args:
        image: Image to encode
        fmt: Pillow format name (JPEG, PNG, WEBP, ...)
        quality: Encoder quality, ignored by formats without one
        dpi: Resolution metadata to write
        icc_profile: ICC profile to embed

    Returns:
        Encoded bytes

    Raises:
        EncodeError: If Pillow fails to write the image
    """
    params: dict[str, Any] = {}
    if quality is not None and fmt in _QUALITY_FORMATS:
        params["quality"] = quality
    if dpi is not None:
        params["dpi"] = dpi
    if icc_profile:
        params["icc_profile"] = icc_profile

    buffer = io.BytesIO()
    try:
        image.save(buffer, format=fmt, **params)
    except (OSError, KeyError, ValueError) as exc:
        raise EncodeError(f"Unable to encode {fmt} image: {exc}", exc) from exc
    return buffer.getvalue()
