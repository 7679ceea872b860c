from __future__ import annotations

import json

import pytest
import requests

SAMPLE_REGISTRY = (
    "OUI/MA-L                                                    Organization\n"
    "company_id                                                  Organization\n"
    "                                                            Address\n"
    "\n"
    "00-22-72   (hex)\t\tAmerican Micro-Fuel Device Corp.\n"
    "002272     (base 16)\t\tAmerican Micro-Fuel Device Corp.\n"
    "\t\t\t\t2181 Buchanan Loop\n"
    "\t\t\t\tFerndale  WA  98248\n"
    "\t\t\t\tUS\n"
    "\n"
    "00-D0-EF   (hex)\t\tIGT\n"
    "00D0EF     (base 16)\t\tIGT\n"
    "\t\t\t\t9295 PROTOTYPE DRIVE\n"
    "\t\t\t\tRENO  NV  89511\n"
    "\t\t\t\tUS\n"
    "\n"
    "30-11-22   (hex)\t\tSome Inc\n"
    "301122     (base 16)\t\tSome Inc\n"
    "\t\t\t\tSome City  Some State  123-456\n"
    "\t\t\t\tAU\n"
).encode("utf-8")


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if not 200 <= self.status_code < 300:
            raise requests.HTTPError(f"{self.status_code} Client Error: bad response", response=self)


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, content: bytes = b"", status_code: int = 200, exc: Exception | None = None) -> None:
        self.content = content
        self.status_code = status_code
        self.exc = exc
        self.calls: list[tuple[str, float | None]] = []

    def get(self, url: str, timeout: float | None = None) -> FakeResponse:
        self.calls.append((url, timeout))
        if self.exc is not None:
            raise self.exc
        return FakeResponse(self.content, self.status_code)


@pytest.fixture
def registry_bytes() -> bytes:
    return SAMPLE_REGISTRY


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "mac-vendors.json"


@pytest.fixture
def test_db(db_path):
    """Cache file holding a single fully populated record for 001122."""
    db_path.write_text(
        json.dumps(
            {
                "001122": {
                    "oui": "001122",
                    "company": "Test Co",
                    "address": "123 Test St, Test City, AU",
                    "country": "AU",
                    "type": "MA-L",
                    "updated": "2023-01-01",
                    "private": False,
                }
            }
        ),
        encoding="utf-8",
    )
    return db_path
