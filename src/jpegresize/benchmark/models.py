"""Data models for benchmark variants and results."""

from __future__ import annotations

import statistics
from dataclasses import dataclass, field

from jpegresize.common.enums import OutputFormat, ResamplingProfile
from jpegresize.imaging.codec import EncodeOptions
from jpegresize.imaging.dimensions import Dimensions
from jpegresize.utils.formatting import format_bytes, format_duration


@dataclass(frozen=True)
class Variant:
    """A named resize configuration to benchmark."""

    name: str
    profile: ResamplingProfile
    options: EncodeOptions
    description: str = ""


# Bicubic, quality 85, source resolution kept
CURRENT = Variant(
    "current",
    ResamplingProfile.HIGH_QUALITY,
    EncodeOptions(OutputFormat.JPEG, quality=85),
    "high-quality bicubic, JPEG q85, source dpi",
)
# Bicubic, encoder-default quality, resolution pinned to 8x8 dpi
LEGACY = Variant(
    "legacy",
    ResamplingProfile.HIGH_QUALITY,
    EncodeOptions(OutputFormat.JPEG, quality=None, dpi=(8, 8)),
    "high-quality bicubic, JPEG default quality, 8x8 dpi",
)
FAST = Variant(
    "fast",
    ResamplingProfile.HIGH_SPEED,
    EncodeOptions(OutputFormat.SOURCE, quality=None),
    "high-speed nearest with draft decode, source format",
)

VARIANTS: dict[str, Variant] = {v.name: v for v in (CURRENT, LEGACY, FAST)}


@dataclass
class BenchmarkResult:
    """Timing and memory figures for one variant."""

    variant: Variant
    target: Dimensions
    durations: list[float] = field(default_factory=list)
    output_size: int = 0
    peak_growth: int = 0
    rss_delta: int = 0
    consistent: bool = True

    @property
    def iterations(self) -> int:
        return len(self.durations)

    @property
    def mean(self) -> float:
        return statistics.fmean(self.durations) if self.durations else 0.0

    @property
    def minimum(self) -> float:
        return min(self.durations, default=0.0)

    @property
    def maximum(self) -> float:
        return max(self.durations, default=0.0)

    def summary_line(self) -> str:
        """One-line human readable summary."""
        return (
            f"{self.variant.name:<8} {self.target} "
            f"mean {format_duration(self.mean)} "
            f"(min {format_duration(self.minimum)}, max {format_duration(self.maximum)}, "
            f"n={self.iterations}) "
            f"output {format_bytes(self.output_size)}, "
            f"peak RSS +{format_bytes(self.peak_growth)}, "
            f"RSS delta {'+' if self.rss_delta >= 0 else ''}{format_bytes(self.rss_delta)}"
        )
