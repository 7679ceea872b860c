"""
Errors raised by the lookup engine.

Every error derives from MacLookupError so callers can catch the whole
family in one place, while the CLI distinguishes NotFound and
LocallyAdministered from real failures.
"""

from __future__ import annotations


class MacLookupError(Exception):
    """Base exception for all MAC lookup errors."""


class InvalidMacAddress(MacLookupError, ValueError):
    def __init__(self, address: str) -> None:
        super().__init__(f"Invalid MAC address format: {address}")
        self.address = address


class NotFound(MacLookupError):
    def __init__(self, address: str) -> None:
        super().__init__(f"No vendor information found for MAC address: {address}")
        self.address = address


class LocallyAdministered(MacLookupError):
    def __init__(self, address: str) -> None:
        super().__init__(
            f"MAC address {address} is locally administered and has no vendor information"
        )
        self.address = address


class DatabaseError(MacLookupError):
    """The persisted cache could not be read, decoded or written."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Database error: {cause}")
        self.cause = cause


class NetworkError(MacLookupError):
    """Transport failure or non-success response while downloading."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Network error: {cause}")
        self.cause = cause


class ApiError(MacLookupError):
    def __init__(self, message: str) -> None:
        super().__init__(f"API error: {message}")
        self.message = message


class DecodeError(ApiError):
    """Registry text or a vendor record could not be decoded."""


class InvalidConfiguration(MacLookupError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Configuration error: {message}")
        self.message = message
