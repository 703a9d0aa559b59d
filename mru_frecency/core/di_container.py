"""
Dependency Injection Container for mru-frecency.

Wires the process-wide store from settings using the dependency-injector
library. The store is a lazily created singleton; ``FrecencyContext`` in
``mru_frecency.api`` owns its lifecycle (load on setup, flush and reset on
close).

Example:
    >>> from mru_frecency.core.di_container import configure_container
    >>> container = configure_container(settings=Settings(data_dir=tmp_path))
    >>> store = container.store()
"""

from __future__ import annotations

from typing import Optional

from dependency_injector import containers, providers

from mru_frecency.core.settings import Settings, get_settings
from mru_frecency.storage.store import MRUStore


def _resolve_settings(configured: Optional[Settings]) -> Settings:
    return configured or get_settings()


class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container for the frecency store.
    """

    # Configuration
    config = providers.Configuration()

    # Settings - this container's override or the global settings
    settings = providers.Callable(
        _resolve_settings,
        config.settings,
    )

    # MRUStore - one per process until reset
    store = providers.Singleton(
        MRUStore.from_settings,
        settings=settings,
    )


def _create_container() -> Container:
    return Container()


container = _create_container()


def configure_container(settings: Optional[Settings] = None) -> Container:
    """
    Configure the global container with runtime values.

    Call before the store is first created; an existing store keeps the
    settings it was built with until ``reset_container()``.

    Args:
        settings: Settings for the store. Uses the global settings if None.

    Returns:
        Configured Container instance
    """
    container.config.set("settings", settings)
    return container


def reset_container() -> None:
    """
    Drop the store singleton and any configured settings.

    Warning:
        Existing handles keep pointing at the old store.
    """
    container.store.reset()
    container.config.set("settings", None)
