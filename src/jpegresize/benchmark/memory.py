"""Process-level resident memory sampling."""

from __future__ import annotations

import gc
import logging
import multiprocessing
import os
import platform
import resource
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final, Generic, TypeVar

logger: Final = logging.getLogger(__name__)

T = TypeVar("T")

_STATM: Final = Path("/proc/self/statm")


def peak_rss_bytes() -> int:
    """Return the process's peak resident set size in bytes."""
    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # macOS reports bytes, Linux reports kilobytes
    return peak if platform.system() == "Darwin" else peak * 1024


def current_rss_bytes() -> int:
    """Return the current resident set size, or the peak where unavailable."""
    try:
        resident_pages = int(_STATM.read_text().split()[1])
    except (OSError, IndexError, ValueError):
        return peak_rss_bytes()
    return resident_pages * os.sysconf("SC_PAGE_SIZE")


@dataclass
class MemorySample(Generic[T]):
    """Resident memory around one call."""

    result: T
    rss_before: int
    rss_after: int
    peak_before: int
    peak_after: int

    @property
    def rss_delta(self) -> int:
        return self.rss_after - self.rss_before

    @property
    def peak_growth(self) -> int:
        """How far the call pushed the process high-water mark."""
        return self.peak_after - self.peak_before


def measure_memory(func: Callable[[], T]) -> MemorySample[T]:
    """Run ``func`` and sample resident memory before and after.

    Garbage is collected first so the baseline does not include
    unreachable objects from earlier work.
    """
    gc.collect()
    rss_before = current_rss_bytes()
    peak_before = peak_rss_bytes()

    result = func()

    sample = MemorySample(
        result=result,
        rss_before=rss_before,
        rss_after=current_rss_bytes(),
        peak_before=peak_before,
        peak_after=peak_rss_bytes(),
    )
    logger.debug("RSS delta %d bytes, peak growth %d bytes", sample.rss_delta, sample.peak_growth)
    return sample


def _sample_without_result(func: Callable[[], object]) -> MemorySample[None]:
    return replace(measure_memory(func), result=None)


def measure_memory_isolated(func: Callable[[], object]) -> MemorySample[None]:
    """Run ``func`` once in a freshly spawned interpreter and sample it there.

    The process high-water mark only ever grows, so sampling in-process
    reports nothing for a call that allocates less than something that ran
    before it. A new interpreter starts from a clean baseline. ``func`` and
    everything it references must be picklable; its result is discarded.
    """
    context = multiprocessing.get_context("spawn")
    with ProcessPoolExecutor(max_workers=1, mp_context=context) as pool:
        return pool.submit(_sample_without_result, func).result()
