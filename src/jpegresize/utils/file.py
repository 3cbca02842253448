"""File and URL utility functions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

import requests

from jpegresize.imaging.errors import OutputError, SourceError

logger: Final = logging.getLogger(__name__)

URL_SCHEMES: Final = ("http://", "https://")


def ensure_directory_exists(directory: Path) -> None:
    """Create directory if it doesn't exist.

    Args:
        directory: Path to create
    """
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug("Created directory: %s", directory)


def is_url(source: str) -> bool:
    return source.startswith(URL_SCHEMES)


def read_source(source: str | Path, timeout: float = 60.0) -> bytes:
    """Read image bytes from a local path or an http(s) URL.

    Args:
        source: File path or URL
        timeout: Request timeout in seconds for URLs

    Returns:
        Raw bytes of the source

    Raises:
        SourceError: If the file or URL cannot be read
    """
    text = str(source)
    if is_url(text):
        try:
            response = requests.get(text, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise SourceError(f"Unable to fetch {text}: {exc}", exc) from exc
        logger.debug("Fetched %d bytes from %s", len(response.content), text)
        return response.content

    try:
        return Path(text).read_bytes()
    except OSError as exc:
        raise SourceError(f"Unable to read {text}: {exc}", exc) from exc


def write_output(output_path: Path, data: bytes) -> Path:
    """Write encoded bytes, creating parent directories as needed.

    Raises:
        OutputError: If the directory or the file cannot be written
    """
    try:
        ensure_directory_exists(output_path.parent)
        output_path.write_bytes(data)
    except OSError as exc:
        raise OutputError(f"Unable to write {output_path}: {exc}", exc) from exc
    logger.debug("Wrote %d bytes to %s", len(data), output_path)
    return output_path
