"""
Parser for the IEEE OUI registry text file (oui.txt).

Each assignment looks like:

    00-22-72   (hex)\t\tAmerican Micro-Fuel Device Corp.
    002272     (base 16)\t\tAmerican Micro-Fuel Device Corp.
    \t\t\t\t2181 Buchanan Loop
    \t\t\t\tFerndale  WA  98248
    \t\t\t\tUS

Only the "(hex)" header line is used; the company name is taken from its
trailing tokens and the address lines below it are ignored.
"""

from __future__ import annotations

import logging
import re

from .errors import DecodeError

logger = logging.getLogger(__name__)

_HEADER_PREFIX = re.compile(r"[0-9A-F]{2}-[0-9A-F]{2}-[0-9A-F]{2}", re.IGNORECASE)
_MARKERS = re.compile(r"\s*\((?:hex|base 16)\)\s*", re.IGNORECASE)
_HEX6 = re.compile(r"[0-9A-F]{6}")


def clean_vendor_name(name: str, oui: str | None = None) -> str:
    """
    Tidy a company name taken from a header line: drop "(hex)"/"(base 16)"
    markers, cut a repeated six-digit code and whatever follows it, and
    collapse whitespace.
    """
    tokens = _MARKERS.sub(" ", name).split()
    for i, tok in enumerate(tokens[1:], start=1):
        # Only an artifact when it repeats the prefix being parsed
        if _HEX6.fullmatch(tok) and (oui is None or tok == oui):
            tokens = tokens[:i]
            break
    return " ".join(tokens)


def _commit(out: dict[str, str], oui: str | None, vendor: str) -> None:
    if oui is None or not vendor:
        return
    name = clean_vendor_name(vendor, oui)
    # A header with nothing but markers after the prefix carries no name
    if name:
        out[oui] = name


def parse_oui_text(data: bytes) -> dict[str, str]:
    """
    Returns mapping: OUI ("001122") -> company name.

    Raises DecodeError if data is not UTF-8. A later assignment of the same
    prefix overwrites an earlier one.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError("Failed to decode OUI data as UTF-8") from e

    out: dict[str, str] = {}
    current: str | None = None
    vendor = ""

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        parts = stripped.split()
        if len(parts) >= 2 and _HEADER_PREFIX.fullmatch(parts[0]):
            _commit(out, current, vendor)
            current = parts[0].replace("-", "").upper()
            vendor = " ".join(parts[1:])
        # Anything else is an address line and does not affect the name

    _commit(out, current, vendor)

    logger.debug("Parsed %d OUI assignments", len(out))
    return out
