from __future__ import annotations

import logging
from pathlib import Path

import requests

from ..errors import FetchError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def download_file(url: str, dest: Path, *, timeout: float) -> Path:
    """Stream url into dest. Any HTTP or network failure is a FetchError.

    A partial file is removed on failure so callers never see a truncated
    download.
    """

    logger.info("Downloading %s -> %s", url, dest)
    dest.parent.mkdir(parents=True, exist_ok=True)
    try:
        with requests.get(url, stream=True, timeout=timeout) as r:
            r.raise_for_status()
            with dest.open("wb") as f:
                for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
    except requests.RequestException as e:
        dest.unlink(missing_ok=True)
        raise FetchError(f"Download failed: {url}: {e}") from e

    if not dest.is_file():
        raise FetchError(f"Download failed - file not found: {dest}")
    return dest


def human_size(num_bytes: int) -> str:
    size = float(num_bytes)
    for unit in ("B", "K", "M", "G"):
        if size < 1024 or unit == "G":
            return f"{size:.0f}{unit}" if unit == "B" else f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}G"
