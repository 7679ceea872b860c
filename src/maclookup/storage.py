from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path

from .errors import DatabaseError, DecodeError
from .vendor import VendorRecord

logger = logging.getLogger(__name__)

_OUI_KEY = re.compile(r"[0-9A-F]{6}")


def utc_now() -> datetime:
    return datetime.now(UTC)


def modified_at(path: str | Path) -> datetime:
    return datetime.fromtimestamp(Path(path).stat().st_mtime, UTC)


def load_db(path: str | Path) -> dict[str, VendorRecord]:
    """
    Returns mapping: OUI -> VendorRecord
    Accepts:
    {
      "001122": {"oui": "...", "company": "...", "address": "...", ...}
    }
    Raises DatabaseError if the file is missing, unreadable or malformed.
    """
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise DatabaseError(e) from e

    if not isinstance(raw, dict):
        err = DecodeError(f"{p} must contain a JSON object")
        raise DatabaseError(err) from err

    out: dict[str, VendorRecord] = {}
    for oui, rec in raw.items():
        key = oui.upper()
        if not _OUI_KEY.fullmatch(key):
            logger.warning("Skipping cache entry with invalid OUI key %r", oui)
            continue
        try:
            out[key] = VendorRecord.from_dict(rec)
        except DecodeError as e:
            raise DatabaseError(e) from e

    logger.debug("Loaded %d vendor records from %s", len(out), p)
    return out


def save_db(path: str | Path, db: Mapping[str, VendorRecord]) -> None:
    """Write the whole cache, replacing the file in one step."""
    p = Path(path)
    payload = {oui: r.to_dict() for oui, r in db.items()}

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(dir=p.parent, prefix=f".{p.name}.", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f)
        os.replace(tmp_name, p)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise DatabaseError(e) from e

    logger.debug("Saved %d vendor records to %s", len(payload), p)
