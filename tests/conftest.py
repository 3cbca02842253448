import io
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

ImageFactory = Callable[..., bytes]


def encode_image(
    width: int,
    height: int,
    fmt: str = "JPEG",
    mode: str = "RGB",
    **save_kwargs: object,
) -> bytes:
    """Build an encoded gradient image of the given size."""
    image = Image.linear_gradient("L").resize((width, height))
    if mode != "L":
        image = image.convert(mode)
    buffer = io.BytesIO()
    image.save(buffer, format=fmt, **save_kwargs)
    return buffer.getvalue()


@pytest.fixture
def make_image() -> ImageFactory:
    return encode_image


@pytest.fixture
def jpeg_bytes() -> bytes:
    return encode_image(400, 300, dpi=(300, 300))


@pytest.fixture
def jpeg_file(tmp_path: Path, jpeg_bytes: bytes) -> Path:
    path = tmp_path / "photo.jpg"
    path.write_bytes(jpeg_bytes)
    return path


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from any real config.yaml on the machine."""
    monkeypatch.delenv("JPEGRESIZE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        "jpegresize.settings.user.UserSettings.DEFAULT_CONFIG_PATHS", [tmp_path / "config.yaml"]
    )
