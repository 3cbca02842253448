# src/jpegresize/imaging/protocols.py
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from jpegresize.common.enums import ResamplingProfile
from jpegresize.imaging.dimensions import BoundingBox, compute_target_size
from jpegresize.imaging.errors import DecodeError

if TYPE_CHECKING:
    from jpegresize.imaging.codec import EncodeOptions


@runtime_checkable
class ImageResizer(Protocol):
    """Protocol defining the interface for resize backends.

    This protocol abstracts the imaging library so the controller and the
    benchmark harness can run against any backend, including the test
    doubles below.
    """

    def resize(
        self,
        data: bytes,
        box: BoundingBox,
        profile: ResamplingProfile = ResamplingProfile.HIGH_QUALITY,
        options: EncodeOptions | None = None,
    ) -> bytes:
        """Resize encoded image bytes.

        Args:
            data: Encoded source image
            box: Bounding box to fit within
            profile: Resampling quality/speed tradeoff
            options: Encoder parameters

        Returns:
            Encoded bytes of the resized image
        """
        ...


class MockResizer:
    """Mock implementation of ImageResizer for testing.

    The source size is fixed at construction; each call still runs the
    real scale-to-fit calculation so dimension errors surface as they
    would with a real backend.
    """

    def __init__(self, source_size: tuple[int, int] = (4000, 3000), output: bytes = b"resized"):
        self.source_size = source_size
        self.output = output
        self.resize_calls: list[dict[str, object]] = []

    def resize(
        self,
        data: bytes,
        box: BoundingBox,
        profile: ResamplingProfile = ResamplingProfile.HIGH_QUALITY,
        options: EncodeOptions | None = None,
    ) -> bytes:
        """Record the call and return the canned output."""
        target = compute_target_size(*self.source_size, *box.as_tuple())
        self.resize_calls.append(
            {"data": data, "box": box, "profile": profile, "options": options, "target": target}
        )
        return self.output

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.resize_calls = []


class ErrorSimulatingResizer(MockResizer):
    """Resizer mock that fails as if the source could not be decoded."""

    def resize(
        self,
        data: bytes,
        box: BoundingBox,
        profile: ResamplingProfile = ResamplingProfile.HIGH_QUALITY,
        options: EncodeOptions | None = None,
    ) -> bytes:
        raise DecodeError("Simulated decoder failure")


def assert_resizer_called_with(
    mock_resizer: MockResizer,
    expected_box: BoundingBox,
    expected_profile: ResamplingProfile = ResamplingProfile.HIGH_QUALITY,
) -> bool:
    """Assert that the last resize call used the expected box and profile.

    Returns:
        True if the assertion passes, raises AssertionError otherwise
    """
    assert len(mock_resizer.resize_calls) > 0, "Resizer was not called"
    last_call = mock_resizer.resize_calls[-1]
    assert last_call["box"] == expected_box, f"Expected {expected_box}, got {last_call['box']}"
    assert last_call["profile"] == expected_profile, (
        f"Expected profile {expected_profile}, got {last_call['profile']}"
    )
    return True
