"""Public API for editor integrations.

Collaborators (editor event hooks, pickers) either hold a ``FrecencyContext``
of their own or use the module-level functions, which share one default
context per process:

    await setup()
    await visit("~/src/project/main.py")
    await visit("grep query")
    score = await get("~/src/project/main.py")
    files = recent_paths()
    await close()

``visit``, ``visit_file``, ``get`` and ``handle`` create the store on first
use. Reading ``recent_paths``/``recent_items`` before ``setup()`` is a
programmer error and raises ``StoreNotInitializedError``.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from mru_frecency.core.di_container import Container, configure_container, container
from mru_frecency.core.errors import StoreNotInitializedError
from mru_frecency.core.models import Entry
from mru_frecency.core.settings import Settings
from mru_frecency.handle import FrecencyHandle, ItemLike
from mru_frecency.storage.store import MRUStore

logger = logging.getLogger(__name__)


class FrecencyContext:
    """Owns exactly one loaded store and its lifecycle."""

    def __init__(self, di_container: Optional[Container] = None):
        self._container = di_container or container
        self._store: Optional[MRUStore] = None
        self._handle: Optional[FrecencyHandle] = None

    @property
    def initialized(self) -> bool:
        return self._store is not None

    @property
    def store(self) -> MRUStore:
        if self._store is None:
            raise StoreNotInitializedError()
        return self._store

    async def setup(self) -> MRUStore:
        """Create and load the store. Later calls return the same store."""
        if self._store is not None:
            return self._store
        store = self._container.store()
        await store.load()
        self._store = store
        self._handle = FrecencyHandle(store)
        return store

    async def close(self) -> None:
        """Flush pending state and drop the store. Safe to call repeatedly."""
        if self._store is None:
            return
        store = self._store
        self._store = None
        self._handle = None
        try:
            if not await store.close():
                logger.warning(f"Unsaved frecency entries dropped for {store.document.path}")
        finally:
            self._container.store.reset()
        logger.info(f"Closed frecency store {store.document.path}")

    async def handle(self) -> FrecencyHandle:
        """New handle snapshotting the current store, set up on demand."""
        return FrecencyHandle(await self.setup())

    async def default_handle(self) -> FrecencyHandle:
        await self.setup()
        assert self._handle is not None
        return self._handle

    async def visit(self, item: ItemLike) -> bool:
        return await (await self.default_handle()).visit(item)

    async def visit_file(self, path: Optional[str]) -> bool:
        """Visit ``path`` only if it names an existing file (buffer-open hook)."""
        handle = await self.default_handle()
        saved = await self.store.visit_file(path)
        handle.refresh()
        return saved

    async def get(self, item: ItemLike, *, seed: bool = True) -> int:
        # Other handles and direct store visits bypass the default handle
        handle = await self.default_handle()
        handle.refresh()
        return handle.get(item, seed=seed)

    def recent_paths(self) -> List[str]:
        return self.store.recent_paths()

    def recent_items(self) -> List[Entry]:
        return self.store.recent_items()


_context = FrecencyContext()


def get_context() -> FrecencyContext:
    """The process-wide default context."""
    return _context


async def setup(settings: Optional[Settings] = None) -> None:
    """
    Initialize the process-wide store. Idempotent.

    Args:
        settings: Settings to build the store from. Ignored once the store
            exists; call ``close()`` first to switch settings.
    """
    if _context.initialized:
        return
    if settings is not None:
        configure_container(settings=settings)
    await _context.setup()


async def close() -> None:
    """Flush and release the process-wide store. Idempotent."""
    await _context.close()


async def visit(raw: ItemLike) -> bool:
    """Record a visit of a path or text item. Returns True if it was saved."""
    return await _context.visit(raw)


async def visit_file(path: Optional[str]) -> bool:
    """Record a visit of an existing file; anything else is ignored."""
    return await _context.visit_file(path)


async def get(item: ItemLike, *, seed: bool = True) -> int:
    """Frecency score of an item (0 if it was never visited)."""
    return await _context.get(item, seed=seed)


async def handle() -> FrecencyHandle:
    """New scoring handle for a picker session."""
    return await _context.handle()


def recent_paths() -> List[str]:
    """Visited paths, most recent first."""
    return _context.recent_paths()


def recent_items() -> List[Entry]:
    """Every visited item (paths and text), most recent first."""
    return _context.recent_items()
