"""Common utility functions and helpers for the jpegresize package."""

from jpegresize.utils.file import ensure_directory_exists, read_source, write_output
from jpegresize.utils.formatting import format_bytes, format_duration

__all__ = [
    "ensure_directory_exists",
    "format_bytes",
    "format_duration",
    "read_source",
    "write_output",
]
