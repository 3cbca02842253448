"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from jpegresize.common.enums import OutputFormat, ResamplingProfile
from jpegresize.imaging.codec import EncodeOptions
from jpegresize.imaging.dimensions import BoundingBox

# Load environment variables from .env file(s)
load_dotenv()

CONFIG_ENV_VAR = "JPEGRESIZE_CONFIG"


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class UserSettings(BaseModel):
    """Resize and benchmark settings. Every field has a default, so an
    empty config.yaml is valid.

    Defaults fit into 500x500 and encode JPEG at quality 85 with the
    high-quality profile.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/jpegresize/config.yaml").expanduser(),
        Path("/etc/jpegresize/config.yaml"),
    ]

    # Bounding box
    desired_width: int = Field(500, gt=0, description="Maximum output width in pixels")
    desired_height: int = Field(
        500, ge=0, description="Maximum output height in pixels (0 = fit width only)"
    )

    # Rendering and encoding
    profile: ResamplingProfile = Field(
        ResamplingProfile.HIGH_QUALITY, description="high-quality or high-speed"
    )
    output_format: OutputFormat = Field(
        OutputFormat.JPEG, description="jpeg, png, webp, or source to keep the input format"
    )
    quality: int | None = Field(
        85, ge=1, le=100, description="Encoder quality (null = encoder default)"
    )
    dpi: tuple[int, int] | None = Field(
        None, description="Output resolution; null copies the source resolution"
    )
    heic: bool = Field(False, description="Decode inputs as HEIC/HEIF")

    # I/O
    output_dir: Path = Field(Path("resized"), description="Directory for batch outputs")
    request_timeout: float = Field(60.0, gt=0, description="Timeout for URL sources (seconds)")

    # Benchmark
    bench_width: int = Field(800, gt=0, description="Benchmark bounding box width")
    bench_height: int = Field(600, ge=0, description="Benchmark bounding box height")
    bench_iterations: int = Field(10, gt=0, description="Timed iterations per variant")
    bench_warmup: int = Field(1, ge=0, description="Untimed warm-up iterations per variant")
    bench_workers: int = Field(1, ge=1, le=64, description="Threads used for timed iterations")
    bench_isolate_memory: bool = Field(
        True, description="Measure memory per variant in a fresh interpreter"
    )

    # ---- validators ----
    @field_validator("dpi")
    @classmethod
    def validate_dpi(cls, v: tuple[int, int] | None) -> tuple[int, int] | None:
        if v is not None and (v[0] <= 0 or v[1] <= 0):
            raise ValueError("dpi values must be positive")
        return v

    # ---- convenience methods ----
    @property
    def box(self) -> BoundingBox:
        """Bounding box for single resizes."""
        return BoundingBox(self.desired_width, self.desired_height)

    @property
    def bench_box(self) -> BoundingBox:
        """Bounding box for benchmark runs."""
        return BoundingBox(self.bench_width, self.bench_height)

    def encode_options(self) -> EncodeOptions:
        """Encoder parameters derived from these settings."""
        return EncodeOptions(output_format=self.output_format, quality=self.quality, dpi=self.dpi)

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated UserSettings object; defaults when no file exists
            and no path was requested

        Raises:
            FileNotFoundError: If an explicitly requested config file is missing
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        # Try to find config file
        if path is None:
            # Check environment variable first
            env_path = os.environ.get(CONFIG_ENV_VAR)
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(f"Config file from {CONFIG_ENV_VAR} not found: {path}")
            else:
                # Try default paths
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    return cls()
        elif not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        # Load and parse config
        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw)
        except Exception as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data or {})
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
