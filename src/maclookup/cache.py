from __future__ import annotations

import logging
import os
from pathlib import Path

from .storage import modified_at, utc_now

logger = logging.getLogger(__name__)

CACHE_FILE_NAME = "mac-vendors.json"


def cache_dir() -> Path:
    """
    Best-effort cache directory.
    - $MACLOOKUP_CACHE_DIR if set
    - $XDG_CACHE_HOME/maclookup
    - ~/.cache/maclookup
    """
    override = os.environ.get("MACLOOKUP_CACHE_DIR")
    if override:
        return Path(override).expanduser()

    xdg = os.environ.get("XDG_CACHE_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".cache"
    return base / "maclookup"


def default_cache_path() -> Path:
    return cache_dir() / CACHE_FILE_NAME


def ensure_cache_dir() -> Path:
    d = cache_dir()
    d.mkdir(parents=True, exist_ok=True)
    return d


def should_update_cache(path: str | Path, force_update: bool, local_only: bool) -> tuple[bool, bool]:
    """
    Returns (should_update, cache_exists)

    - force_update: always download
    - no cache + local_only: nothing to do, caller decides how to fail
    - no cache: download
    - cache present: use it
    """
    p = Path(path)
    exists = p.is_file()

    logger.debug("Cache file: %s (exists: %s)", p, exists)
    if exists:
        try:
            age = utc_now() - modified_at(p)
            logger.debug("Cache age: %d hours, size: %d bytes", age.total_seconds() // 3600, p.stat().st_size)
        except OSError as e:
            logger.debug("Error reading cache attributes: %s", e)

    if force_update:
        return True, exists
    if not exists and local_only:
        return False, False
    if not exists:
        return True, False
    return False, True
