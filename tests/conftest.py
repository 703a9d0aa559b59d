"""Shared fixtures for frecency store tests"""

import os
from pathlib import Path

import pytest

from mru_frecency.core.settings import Settings
from mru_frecency.storage.store import MRUStore


class FakeClock:
    """Deterministic ``time.time`` replacement advancing one second per call."""

    def __init__(self, start: int = 1_700_000_000):
        self.now = start

    def __call__(self) -> float:
        self.now += 1
        return float(self.now)


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch):
    """Keep XDG lookups and MRU_FRECENCY_* overrides away from the real home."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    for name in list(os.environ):
        if name.startswith("MRU_FRECENCY_"):
            monkeypatch.delenv(name)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a temp data dir with a short lock budget."""
    return Settings(
        data_dir=tmp_path / "data",
        lock_timeout_ms=200,
        lock_poll_interval_ms=10,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
async def store(settings: Settings) -> MRUStore:
    """Loaded store on an empty document"""
    mru = MRUStore.from_settings(settings)
    await mru.load()
    return mru
