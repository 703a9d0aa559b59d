"""
Tests for DI Container (dependency-injector).

The container builds one MRUStore per process from the configured settings.
"""

from __future__ import annotations

import pytest

from mru_frecency.core.di_container import (
    Container,
    configure_container,
    container,
    reset_container,
)
from mru_frecency.core.settings import LockPolicy, Settings
from mru_frecency.core.strategies import PathOnlyClassifier
from mru_frecency.storage.store import MRUStore


@pytest.fixture(autouse=True)
def reset_container_fixture():
    """Reset container before and after each test."""
    reset_container()
    yield
    reset_container()


class TestContainerInitialization:
    def test_container_exists(self):
        from dependency_injector.containers import DynamicContainer

        assert isinstance(container, DynamicContainer)

    def test_container_has_all_providers(self):
        assert hasattr(container, "config")
        assert hasattr(container, "settings")
        assert hasattr(container, "store")


class TestStoreProvider:
    def test_store_returns_correct_type(self, tmp_path):
        configure_container(settings=Settings(data_dir=tmp_path))
        assert isinstance(container.store(), MRUStore)

    def test_store_uses_configured_settings(self, tmp_path):
        settings = Settings(
            data_dir=tmp_path,
            max_entries=7,
            lock_policy=LockPolicy.BEST_EFFORT,
            classifier="path",
        )
        configure_container(settings=settings)
        store = container.store()
        assert store.document.path == tmp_path / "frecency.json"
        assert store.lock.lock_path == tmp_path / "frecency.json.lock"
        assert store.max_entries == 7
        assert store.lock_policy is LockPolicy.BEST_EFFORT
        assert isinstance(store.normalizer.classifier, PathOnlyClassifier)

    def test_store_is_singleton(self, tmp_path):
        configure_container(settings=Settings(data_dir=tmp_path))
        assert container.store() is container.store()

    def test_reset_creates_new_store(self, tmp_path):
        configure_container(settings=Settings(data_dir=tmp_path))
        first = container.store()
        reset_container()
        configure_container(settings=Settings(data_dir=tmp_path))
        assert container.store() is not first

    def test_falls_back_to_global_settings(self, tmp_path, monkeypatch):
        monkeypatch.setattr("mru_frecency.core.settings.settings", Settings())
        store = container.store()
        assert store.document.path == tmp_path / "xdg-data" / "mru-frecency" / "frecency.json"

    def test_separate_container_keeps_its_own_settings(self, tmp_path):
        configure_container(settings=Settings(data_dir=tmp_path / "global"))
        own = Container()
        own.config.set("settings", Settings(data_dir=tmp_path / "own"))

        assert own.store().document.path == tmp_path / "own" / "frecency.json"
        assert container.store().document.path == tmp_path / "global" / "frecency.json"
        assert own.store() is not container.store()
