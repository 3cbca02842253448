"""Shared enumerations."""

from jpegresize.common.enums import OutputFormat, ResamplingProfile

__all__ = ["OutputFormat", "ResamplingProfile"]
