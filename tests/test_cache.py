from pathlib import Path

import pytest

from maclookup.cache import cache_dir, default_cache_path, ensure_cache_dir, should_update_cache


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("MACLOOKUP_CACHE_DIR", raising=False)
    monkeypatch.delenv("XDG_CACHE_HOME", raising=False)


def test_cache_dir_override(monkeypatch, tmp_path):
    monkeypatch.setenv("MACLOOKUP_CACHE_DIR", str(tmp_path / "custom"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))
    assert cache_dir() == tmp_path / "custom"


def test_cache_dir_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))
    assert cache_dir() == tmp_path / "xdg" / "maclookup"
    assert default_cache_path() == tmp_path / "xdg" / "maclookup" / "mac-vendors.json"


def test_cache_dir_home_fallback(monkeypatch, tmp_path):
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    assert cache_dir() == tmp_path / ".cache" / "maclookup"


def test_ensure_cache_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("MACLOOKUP_CACHE_DIR", str(tmp_path / "a" / "b"))
    d = ensure_cache_dir()
    assert d.is_dir()
    ensure_cache_dir()


def test_should_update_cache_missing(db_path):
    assert should_update_cache(db_path, force_update=False, local_only=False) == (True, False)
    assert should_update_cache(db_path, force_update=False, local_only=True) == (False, False)
    assert should_update_cache(db_path, force_update=True, local_only=False) == (True, False)


def test_should_update_cache_present(test_db):
    assert should_update_cache(test_db, force_update=False, local_only=False) == (False, True)
    assert should_update_cache(test_db, force_update=False, local_only=True) == (False, True)
    assert should_update_cache(test_db, force_update=True, local_only=False) == (True, True)
