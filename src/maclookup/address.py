from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidMacAddress

# Six groups of one or two digits, e.g. "8:b6:1f:d0:f5:d8"
_GROUPS = re.compile(r"([0-9a-f]{1,2}:){5}[0-9a-f]{1,2}")
# Twelve digits in pairs with optional separators, e.g. "001122334455" or "0011:2233:4455"
_PAIRS = re.compile(r"([0-9a-f]{2}:?){5}[0-9a-f]{2}")


@dataclass(frozen=True)
class MacAddress:
    """
    A 48-bit hardware address stored as six octets in network byte order.

    Parse text with MacAddress.parse(); str() always gives the canonical
    "XX:XX:XX:XX:XX:XX" form regardless of how the input was written.
    """

    octets: tuple[int, int, int, int, int, int]

    def __post_init__(self) -> None:
        if len(self.octets) != 6 or not all(0 <= b <= 0xFF for b in self.octets):
            raise ValueError(f"MAC address needs six octets in 0..255, got {self.octets!r}")

    @classmethod
    def parse(cls, text: str) -> MacAddress:
        """
        Accepts colon, hyphen, dot and bare hex forms:
          00:11:22:33:44:55, 00-11-22-33-44-55, 0011.2233.4455, 001122334455, 0:11:2:33:4:55
        Raises InvalidMacAddress for anything else.
        """
        normalized = text.replace("-", ":").replace(".", ":").lower()

        if _GROUPS.fullmatch(normalized):
            groups = normalized.split(":")
        elif _PAIRS.fullmatch(normalized):
            digits = normalized.replace(":", "")
            groups = [digits[i : i + 2] for i in range(0, len(digits), 2)]
        else:
            raise InvalidMacAddress(text)

        if len(groups) != 6:
            raise InvalidMacAddress(text)

        try:
            octets = tuple(int(g, 16) for g in groups)
        except ValueError:
            raise InvalidMacAddress(text) from None
        return cls(octets)  # type: ignore[arg-type]

    @property
    def oui(self) -> str:
        """First three octets as six uppercase hex digits, e.g. "001122"."""
        return "".join(f"{b:02X}" for b in self.octets[:3])

    @property
    def is_locally_administered(self) -> bool:
        # Bit 1 of the first octet marks software/admin assigned addresses
        return bool(self.octets[0] & 0x02)

    @property
    def description(self) -> str:
        return ":".join(f"{b:02X}" for b in self.octets)

    @property
    def packed(self) -> bytes:
        return bytes(self.octets)

    def to_dict(self) -> dict[str, int]:
        return {f"byte{i}": b for i, b in enumerate(self.octets)}

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> MacAddress:
        try:
            octets = tuple(int(data[f"byte{i}"]) for i in range(6))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid MAC address record: {data!r}") from e
        return cls(octets)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return self.description
