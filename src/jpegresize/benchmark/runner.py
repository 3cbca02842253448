"""Benchmark harness comparing resize variants on the same source."""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Final

from jpegresize.benchmark.memory import measure_memory, measure_memory_isolated
from jpegresize.benchmark.models import VARIANTS, BenchmarkResult, Variant
from jpegresize.imaging import codec
from jpegresize.imaging.dimensions import BoundingBox, Dimensions, fit_within
from jpegresize.imaging.protocols import ImageResizer

logger: Final = logging.getLogger(__name__)


class BenchmarkRunner:
    """Times resize variants over one in-memory source image.

    Each variant gets ``warmup`` untimed calls followed by ``iterations``
    timed calls. With ``workers > 1`` the timed calls run on a thread pool;
    every call is independent, so results must match a sequential run.

    With ``isolate_memory`` (the default) the memory figures come from one
    extra call per variant in a fresh interpreter, so they do not depend on
    the order variants run in. The resizer must then be picklable.
    """

    def __init__(
        self,
        resizer: ImageResizer,
        iterations: int = 10,
        warmup: int = 1,
        workers: int = 1,
        heic: bool = False,
        isolate_memory: bool = True,
    ) -> None:
        if iterations <= 0:
            raise ValueError("iterations must be positive")
        if warmup < 0:
            raise ValueError("warmup cannot be negative")
        if workers <= 0:
            raise ValueError("workers must be positive")
        self.resizer = resizer
        self.iterations = iterations
        self.warmup = warmup
        self.workers = workers
        self.heic = heic
        self.isolate_memory = isolate_memory

    def source_dimensions(self, data: bytes) -> Dimensions:
        """Read the source size from the image header."""
        with codec.open_image(data, heic=self.heic) as image:
            return Dimensions(*image.size)

    def run(
        self, data: bytes, box: BoundingBox, variants: Iterable[Variant] | None = None
    ) -> list[BenchmarkResult]:
        """Benchmark every variant (all presets by default).

        Raises:
            InvalidDimensionsError: Before any timing, if the box is unusable
        """
        target = fit_within(self.source_dimensions(data), box)
        chosen = list(variants) if variants is not None else list(VARIANTS.values())
        return [self._run_variant(data, box, target, variant) for variant in chosen]

    def _run_variant(
        self, data: bytes, box: BoundingBox, target: Dimensions, variant: Variant
    ) -> BenchmarkResult:
        logger.info(
            "Benchmarking %s: %d warm-up, %d timed, %d worker(s)",
            variant.name,
            self.warmup,
            self.iterations,
            self.workers,
        )
        for _ in range(self.warmup):
            self.resizer.resize(data, box, variant.profile, variant.options)

        if self.isolate_memory:
            timings = self._timed_calls(data, box, variant)
            call = functools.partial(
                self.resizer.resize, data, box, variant.profile, variant.options
            )
            isolated = measure_memory_isolated(call)
            peak_growth, rss_delta = isolated.peak_growth, isolated.rss_delta
        else:
            sample = measure_memory(lambda: self._timed_calls(data, box, variant))
            timings = sample.result
            peak_growth, rss_delta = sample.peak_growth, sample.rss_delta
        outputs = [output for _, output in timings]

        result = BenchmarkResult(
            variant=variant,
            target=target,
            durations=[elapsed for elapsed, _ in timings],
            output_size=len(outputs[0]),
            peak_growth=peak_growth,
            rss_delta=rss_delta,
            consistent=all(output == outputs[0] for output in outputs),
        )
        if not result.consistent:
            logger.warning("Variant %s produced differing outputs across iterations", variant.name)
        logger.info(result.summary_line())
        return result

    def _timed_calls(
        self, data: bytes, box: BoundingBox, variant: Variant
    ) -> list[tuple[float, bytes]]:
        def once(_: int) -> tuple[float, bytes]:
            start = time.perf_counter()
            output = self.resizer.resize(data, box, variant.profile, variant.options)
            return time.perf_counter() - start, output

        if self.workers == 1:
            return [once(i) for i in range(self.iterations)]
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            return list(pool.map(once, range(self.iterations)))
