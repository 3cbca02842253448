"""Scale-to-fit image resizing and resize benchmarking."""

__version__ = "0.1.0"
