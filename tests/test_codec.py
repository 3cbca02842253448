import io
from collections.abc import Callable
from unittest.mock import patch

import pytest
from PIL import Image, ImageCms

from jpegresize.common.enums import OutputFormat
from jpegresize.imaging import codec
from jpegresize.imaging.codec import EncodeOptions
from jpegresize.imaging.errors import DecodeError, EncodeError, UnsupportedFormatError

ImageFactory = Callable[..., bytes]


def test_open_image_is_lazy_and_reports_size(make_image: ImageFactory) -> None:
    image = codec.open_image(make_image(640, 480))
    assert image.size == (640, 480)
    assert image.format == "JPEG"
    assert codec.load_image(image) is image


def test_open_image_rejects_garbage() -> None:
    with pytest.raises(DecodeError) as excinfo:
        codec.open_image(b"definitely not an image")
    assert excinfo.value.original_error is not None


def test_load_image_rejects_truncated_data(make_image: ImageFactory) -> None:
    data = make_image(640, 480)
    image = codec.open_image(data[: len(data) // 2])
    with pytest.raises(DecodeError):
        codec.load_image(image)


def test_heic_without_plugin_is_unsupported(make_image: ImageFactory) -> None:
    with patch.dict("sys.modules", {"pillow_heif": None}):
        with pytest.raises(UnsupportedFormatError):
            codec.open_image(make_image(10, 10), heic=True)


def test_apply_draft_downscales_jpeg_but_not_below_target(make_image: ImageFactory) -> None:
    image = codec.open_image(make_image(1600, 1200))
    codec.apply_draft(image, (200, 150))
    width, height = image.size
    assert 200 <= width < 1600
    assert 150 <= height < 1200


def test_apply_draft_ignores_png(make_image: ImageFactory) -> None:
    image = codec.open_image(make_image(1600, 1200, fmt="PNG"))
    codec.apply_draft(image, (200, 150))
    assert image.size == (1600, 1200)


def test_apply_draft_handles_mpo(make_image: ImageFactory) -> None:
    second = Image.new("RGB", (1600, 1200), "gray")
    data = make_image(1600, 1200, fmt="MPO", save_all=True, append_images=[second])
    image = codec.open_image(data)
    assert image.format == "MPO"

    codec.apply_draft(image, (200, 150))

    assert image.size[0] < 1600


def test_to_srgb_without_profile_is_identity() -> None:
    image = Image.new("RGB", (8, 8), "red")
    assert codec.to_srgb(image) is image


def test_to_srgb_converts_embedded_profile() -> None:
    icc = ImageCms.ImageCmsProfile(ImageCms.createProfile("sRGB")).tobytes()
    image = Image.new("RGB", (8, 8), (10, 200, 30))
    image.info["icc_profile"] = icc

    converted = codec.to_srgb(image)

    assert converted is not image
    assert converted.mode == "RGB"
    assert converted.size == (8, 8)


def test_to_srgb_keeps_alpha() -> None:
    icc = ImageCms.ImageCmsProfile(ImageCms.createProfile("sRGB")).tobytes()
    image = Image.new("RGBA", (16, 16), (10, 200, 30, 255))
    image.putalpha(Image.linear_gradient("L").resize((16, 16)))
    image.info["icc_profile"] = icc

    converted = codec.to_srgb(image)

    assert converted.mode == "RGBA"
    assert converted.getchannel("A").tobytes() == image.getchannel("A").tobytes()


def test_to_srgb_ignores_unusable_profile(caplog: pytest.LogCaptureFixture) -> None:
    image = Image.new("RGB", (8, 8))
    image.info["icc_profile"] = b"not an icc profile"

    assert codec.to_srgb(image) is image
    assert "Ignoring unusable ICC profile" in caplog.text


def test_resolve_format() -> None:
    assert codec.resolve_format("PNG", OutputFormat.JPEG) == "JPEG"
    assert codec.resolve_format("PNG", OutputFormat.SOURCE) == "PNG"
    with pytest.raises(UnsupportedFormatError):
        codec.resolve_format(None, OutputFormat.SOURCE)


@pytest.mark.parametrize(
    "mode, fmt, expected",
    [
        ("RGBA", "JPEG", "RGB"),
        ("P", "JPEG", "RGB"),
        ("RGB", "JPEG", "RGB"),
        ("L", "JPEG", "L"),
        ("RGBA", "WEBP", "RGBA"),
        ("LA", "WEBP", "RGBA"),
        ("CMYK", "PNG", "RGB"),
        ("RGBA", "PNG", "RGBA"),
    ],
)
def test_prepare_for_format(mode: str, fmt: str, expected: str) -> None:
    image = Image.new(mode, (4, 4))
    assert codec.prepare_for_format(image, fmt).mode == expected


def test_encode_quality_changes_jpeg_size() -> None:
    image = Image.effect_noise((128, 128), 64).convert("RGB")
    low = codec.encode(image, "JPEG", quality=10)
    high = codec.encode(image, "JPEG", quality=95)
    assert len(low) < len(high)


def test_encode_writes_dpi() -> None:
    data = codec.encode(Image.new("RGB", (16, 16)), "JPEG", quality=85, dpi=(8, 8))
    with Image.open(io.BytesIO(data)) as decoded:
        assert decoded.info["dpi"] == (8, 8)


def test_encode_ignores_quality_for_png() -> None:
    data = codec.encode(Image.new("RGB", (16, 16)), "PNG", quality=85)
    with Image.open(io.BytesIO(data)) as decoded:
        assert decoded.format == "PNG"


def test_encode_wraps_encoder_failures() -> None:
    with pytest.raises(EncodeError):
        codec.encode(Image.new("RGBA", (4, 4)), "JPEG")


def test_encode_options_validate_quality() -> None:
    assert EncodeOptions().quality == 85
    assert EncodeOptions(quality=None).quality is None
    with pytest.raises(ValueError):
        EncodeOptions(quality=0)
    with pytest.raises(ValueError):
        EncodeOptions(quality=101)
