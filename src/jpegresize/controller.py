# filepath: src/jpegresize/controller.py
"""Core controller for resizing and benchmarking images."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Final

from jpegresize.benchmark.models import VARIANTS, BenchmarkResult, Variant
from jpegresize.benchmark.runner import BenchmarkRunner
from jpegresize.imaging.dimensions import BoundingBox
from jpegresize.imaging.pillow import PillowResizer
from jpegresize.imaging.protocols import ImageResizer
from jpegresize.settings.user import UserSettings
from jpegresize.utils.file import is_url, read_source, write_output

logger: Final = logging.getLogger(__name__)

_EXTENSIONS: Final[dict[str, str]] = {"JPEG": ".jpg", "PNG": ".png", "WEBP": ".webp"}


class ResizeController:
    """Main controller for the resize utility.

    This class wires the pieces together:
    - Loading settings and configuring logging
    - Reading sources from disk or http(s) URLs
    - Resizing through the injected or default resizer
    - Writing outputs and running benchmarks

    The resizer can be injected so tests run without touching Pillow.
    """

    def __init__(
        self,
        settings: UserSettings | None = None,
        config_path: Path | None = None,
        resizer: ImageResizer | None = None,
        debug: bool = False,
    ):
        """Initialize the controller.

        Args:
            settings: Pre-built settings (takes precedence over config_path)
            config_path: Path to config.yaml
            resizer: Optional custom resize backend
            debug: Enable debug logging
        """
        # Configure logging
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(asctime)s [%(levelname)s] %(message)s",
        )

        self.settings: UserSettings = settings or UserSettings.load(config_path)
        self.resizer = resizer or PillowResizer(heic=self.settings.heic)

    def read(self, source: str | Path) -> bytes:
        """Read source bytes using the configured request timeout."""
        return read_source(source, timeout=self.settings.request_timeout)

    def resize_bytes(self, data: bytes, box: BoundingBox | None = None) -> bytes:
        """Resize encoded bytes with the configured profile and encoder."""
        return self.resizer.resize(
            data,
            box or self.settings.box,
            self.settings.profile,
            self.settings.encode_options(),
        )

    def resize_file(
        self,
        source: str | Path,
        output: Path | None = None,
        box: BoundingBox | None = None,
    ) -> Path:
        """Resize one source and write the result.

        Args:
            source: Input path or URL
            output: Output path (default: settings.output_dir / source name)
            box: Bounding box (default: from settings)

        Returns:
            Path of the written file
        """
        data = self.read(source)
        resized = self.resize_bytes(data, box)
        out_path = output or self.default_output_path(source)
        write_output(out_path, resized)
        logger.info("Resized %s -> %s (%d bytes)", source, out_path, len(resized))
        return out_path

    def default_output_path(self, source: str | Path) -> Path:
        """Build an output path inside settings.output_dir."""
        text = str(source)
        name = text.rstrip("/").rsplit("/", 1)[-1] if is_url(text) else Path(text).name
        stem = Path(name).stem or "image"
        fmt = self.settings.output_format.pil_format
        suffix = _EXTENSIONS.get(fmt, Path(name).suffix) if fmt else Path(name).suffix
        return self.settings.output_dir / f"{stem}_resized{suffix}"

    def benchmark(
        self,
        source: str | Path,
        variant_names: Iterable[str] | None = None,
        box: BoundingBox | None = None,
    ) -> list[BenchmarkResult]:
        """Benchmark the named variants (all by default) on one source.

        Raises:
            ValueError: If a variant name is unknown
        """
        variants: list[Variant] | None = None
        names = list(variant_names or [])
        if names:
            unknown = [name for name in names if name not in VARIANTS]
            if unknown:
                raise ValueError(f"Unknown variant(s): {', '.join(unknown)}")
            variants = [VARIANTS[name] for name in names]

        runner = BenchmarkRunner(
            self.resizer,
            iterations=self.settings.bench_iterations,
            warmup=self.settings.bench_warmup,
            workers=self.settings.bench_workers,
            heic=self.settings.heic,
            isolate_memory=self.settings.bench_isolate_memory,
        )
        return runner.run(self.read(source), box or self.settings.bench_box, variants)

