"""Benchmark harness for resize variants."""

from jpegresize.benchmark.memory import MemorySample, measure_memory, peak_rss_bytes
from jpegresize.benchmark.models import CURRENT, FAST, LEGACY, VARIANTS, BenchmarkResult, Variant
from jpegresize.benchmark.runner import BenchmarkRunner

__all__ = [
    "CURRENT",
    "FAST",
    "LEGACY",
    "VARIANTS",
    "BenchmarkResult",
    "BenchmarkRunner",
    "MemorySample",
    "Variant",
    "measure_memory",
    "peak_rss_bytes",
]
