import pytest

from jpegresize.imaging.errors import (
    DecodeError,
    EncodeError,
    InvalidDimensionsError,
    OutputError,
    ResizeError,
    SourceError,
    UnsupportedFormatError,
)


def test_invalid_dimensions_message_with_target() -> None:
    err = InvalidDimensionsError((10000, 1), (500, 500), (500, 0))
    assert str(err) == "Calculated dimensions 500x0 are invalid (source 10000x1, box 500x500)"


def test_invalid_dimensions_message_for_degenerate_source() -> None:
    err = InvalidDimensionsError((0, 10), (500, 500))
    assert str(err) == "Source dimensions 0x10 are invalid"
    assert err.target is None


@pytest.mark.parametrize(
    "error_type", [DecodeError, EncodeError, UnsupportedFormatError, SourceError, OutputError]
)
def test_library_errors_wrap_original(error_type: type[DecodeError]) -> None:
    try:
        raise OSError("BOOM")
    except OSError as e:
        err = error_type("Library failure", original_error=e)
        assert isinstance(err, ResizeError)
        assert str(err) == "Library failure"
        assert err.message == "Library failure"
        assert isinstance(err.original_error, OSError)


def test_original_error_is_optional() -> None:
    err = DecodeError("bad data")
    assert err.original_error is None
