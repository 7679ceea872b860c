from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .errors import DecodeError

logger = logging.getLogger(__name__)

# JSON key -> attribute, in the order records are written
CANONICAL_FIELDS = {
    "oui": "prefix",
    "company": "company_name",
    "address": "company_address",
    "country": "country_code",
    "type": "block_type",
    "updated": "updated",
    "private": "is_private",
}


def _bool_str(value: bool) -> str:
    return "true" if value else "false"


def _coerce_extra(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return _bool_str(value)
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return str(value)
    raise TypeError(f"unsupported value type {type(value).__name__}")


@dataclass(frozen=True)
class VendorRecord:
    """
    Vendor information for one address block.

    raw_data mirrors the canonical fields as strings and additionally keeps
    any extra fields found in the source record.
    """

    prefix: str
    company_name: str
    company_address: str = ""
    country_code: str = ""
    block_type: str = "MA-L"
    updated: str = ""
    is_private: bool = False
    raw_data: Mapping[str, str] = field(default=None, compare=False, repr=False)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        raw = dict(self.raw_data or {})
        raw.update(
            {
                "oui": self.prefix,
                "company": self.company_name,
                "address": self.company_address,
                "country": self.country_code,
                "type": self.block_type,
                "updated": self.updated,
                "private": _bool_str(self.is_private),
            }
        )
        object.__setattr__(self, "raw_data", MappingProxyType(raw))

    @classmethod
    def from_vendor_name(cls, name: str) -> VendorRecord:
        """Record for a registry entry, which carries only the company name."""
        return cls(prefix="", company_name=name)

    @classmethod
    def from_dict(cls, data: Any) -> VendorRecord:
        if not isinstance(data, dict):
            raise DecodeError(f"Vendor record must be an object, got {type(data).__name__}")

        prefix = data.get("oui")
        company = data.get("company")
        if not isinstance(prefix, str):
            raise DecodeError("Vendor record field 'oui' is missing or not a string")
        if not isinstance(company, str):
            raise DecodeError("Vendor record field 'company' is missing or not a string")

        def optional_str(key: str, default: str = "") -> str:
            value = data.get(key)
            if value is None:
                return default
            if not isinstance(value, str):
                raise DecodeError(f"Vendor record field '{key}' is not a string")
            return value

        private = data.get("private", False)
        if isinstance(private, str):
            is_private = private.lower() == "true"
        else:
            is_private = private is True

        extras: dict[str, str] = {}
        for key, value in data.items():
            if key in CANONICAL_FIELDS:
                continue
            try:
                extras[key] = _coerce_extra(value)
            except TypeError as e:
                logger.warning("Skipping vendor record field %r: %s", key, e)

        return cls(
            prefix=prefix,
            company_name=company,
            company_address=optional_str("address"),
            country_code=optional_str("country"),
            block_type=optional_str("type", "MA-L"),
            updated=optional_str("updated"),
            is_private=is_private,
            raw_data=extras,
        )

    @classmethod
    def decode(cls, data: bytes | str) -> VendorRecord:
        try:
            obj = json.loads(data)
        except (ValueError, UnicodeDecodeError) as e:
            raise DecodeError(f"Invalid vendor record JSON: {e}") from e
        return cls.from_dict(obj)

    def to_dict(self) -> dict[str, Any]:
        return {key: getattr(self, attr) for key, attr in CANONICAL_FIELDS.items()}

    def encode(self) -> bytes:
        return json.dumps(self.to_dict()).encode("utf-8")
