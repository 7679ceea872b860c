from __future__ import annotations

import logging
import os
import threading
from datetime import datetime
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from .address import MacAddress
from .cache import default_cache_path
from .errors import DatabaseError, InvalidConfiguration, LocallyAdministered, NetworkError, NotFound
from .oui import parse_oui_text
from .storage import load_db, modified_at, save_db, utc_now
from .vendor import VendorRecord

logger = logging.getLogger(__name__)

IEEE_OUI_URL = "https://standards-oui.ieee.org/oui/oui.txt"


class MacLookup:
    """
    Resolves MAC addresses to vendors using a local cache of the IEEE OUI
    registry, downloading the registry when an address is not cached.

    Safe to share between threads: the in-memory cache is only read or
    replaced under a lock, while downloads and file writes happen outside it.
    """

    def __init__(
        self,
        database_path: str | Path | None = None,
        online_url: str = IEEE_OUI_URL,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self._path = Path(database_path) if database_path is not None else default_cache_path()
        self.online_url = online_url
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()

        self._db: dict[str, VendorRecord] = {}
        self._last_updated: datetime | None = None
        self._lock = threading.RLock()
        # Serializes cache file writers so an older snapshot never lands last
        self._write_lock = threading.RLock()

    @property
    def database_path(self) -> Path:
        return self._path

    @property
    def last_updated(self) -> datetime | None:
        with self._lock:
            return self._last_updated

    def __len__(self) -> int:
        with self._lock:
            return len(self._db)

    def __contains__(self, oui: object) -> bool:
        with self._lock:
            return oui in self._db

    # -------------------------------------------------
    # Local database
    # -------------------------------------------------

    def load_local_database(self) -> None:
        """Replace the in-memory cache with the contents of the cache file."""
        db = load_db(self._path)
        try:
            stamp = modified_at(self._path)
        except OSError as e:
            raise DatabaseError(e) from e

        with self._lock:
            self._db = db
            self._last_updated = stamp

    def save_local_database(self) -> None:
        with self._write_lock:
            with self._lock:
                snapshot = dict(self._db)
            save_db(self._path, snapshot)
            with self._lock:
                self._last_updated = utc_now()

    def _get(self, oui: str) -> VendorRecord | None:
        with self._lock:
            return self._db.get(oui)

    # -------------------------------------------------
    # Fetching
    # -------------------------------------------------

    def _download(self, url: str) -> bytes:
        logger.debug("Downloading %s", url)
        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(e) from e

        data = response.content
        logger.debug("Downloaded %d bytes from %s", len(data), url)
        return data

    def _fetch(self, source: str | os.PathLike[str]) -> bytes:
        """
        Registry bytes from an http(s) URL, a file:// URL or a filesystem path.
        """
        if isinstance(source, os.PathLike):
            path = Path(source)
        else:
            parsed = urlparse(source)
            scheme = parsed.scheme.lower()
            if scheme in ("http", "https"):
                return self._download(source)
            if scheme == "file":
                path = Path(url2pathname(parsed.path))
            elif scheme == "" or len(scheme) == 1:
                # Plain path (a one-letter scheme is a Windows drive)
                path = Path(source)
            else:
                raise InvalidConfiguration(f"Unsupported online source: {source}")

        try:
            return path.read_bytes()
        except OSError as e:
            raise InvalidConfiguration(f"Cannot read registry file {path}: {e}") from e

    # -------------------------------------------------
    # Lookups
    # -------------------------------------------------

    @staticmethod
    def _parse(mac: str | MacAddress) -> tuple[MacAddress, str]:
        if isinstance(mac, MacAddress):
            return mac, str(mac)
        return MacAddress.parse(mac), mac

    def lookup_local(self, mac: str | MacAddress) -> VendorRecord:
        """
        Cache-only lookup; never touches the network or disk.

        Raises InvalidMacAddress, LocallyAdministered or NotFound.
        """
        address, text = self._parse(mac)
        if address.is_locally_administered:
            raise LocallyAdministered(text)

        record = self._get(address.oui)
        if record is None:
            raise NotFound(text)
        return record

    def lookup_online(self, mac: str | MacAddress, update_local: bool = True) -> VendorRecord:
        """
        Download the registry and look the address up in it.

        Locally administered addresses are not rejected here; they simply
        go through the download and end in NotFound. With update_local the
        result is added to the cache and the cache file is rewritten.
        """
        address, text = self._parse(mac)
        oui = address.oui

        registry = parse_oui_text(self._fetch(self.online_url))
        name = registry.get(oui)
        if name is None:
            raise NotFound(text)

        record = VendorRecord.from_vendor_name(name)
        if update_local:
            # Held across insert and save so a concurrent update_database cannot
            # swap the cache out between them
            with self._write_lock:
                with self._lock:
                    self._db[oui] = record
                self.save_local_database()
        return record

    def lookup(self, mac: str | MacAddress) -> VendorRecord:
        """
        Cache first, then the online registry.

        Locally administered addresses fail immediately with
        LocallyAdministered; only NotFound from the cache falls through to
        the download.
        """
        address, text = self._parse(mac)
        if address.is_locally_administered:
            raise LocallyAdministered(text)

        try:
            return self.lookup_local(address)
        except NotFound:
            logger.debug("%s not cached, trying online registry", text)

        return self.lookup_online(text)

    def lookup_address_online(
        self, address: MacAddress, source: str | os.PathLike[str] | None = None
    ) -> VendorRecord:
        """
        Resolve a parsed address, refreshing the whole cache from source
        when it is missing and then trying shorter prefixes for MA-M/MA-S
        style blocks.
        """
        oui = address.oui
        record = self._get(oui)
        if record is not None:
            return record

        self.update_database(source)

        # Cache keys are always six digits, so the shorter prefixes only match
        # if a cache ever stores MA-M/MA-S style keys
        for prefix in dict.fromkeys((oui, oui[:6], oui[:4])):
            record = self._get(prefix)
            if record is not None:
                return record

        raise NotFound(str(address))

    # -------------------------------------------------
    # Full refresh
    # -------------------------------------------------

    def update_database(self, source: str | os.PathLike[str] | None = None) -> None:
        """
        Replace the cache with a fresh copy of the registry.

        Entries missing from the new registry are dropped. The result is
        written to the cache file and then loaded back from it.
        """
        data = self._fetch(source if source is not None else self.online_url)
        registry = parse_oui_text(data)
        records = {oui: VendorRecord.from_vendor_name(name) for oui, name in registry.items()}

        with self._write_lock:
            save_db(self._path, records)
            self.load_local_database()

        logger.debug("Vendor database updated with %d entries", len(records))
