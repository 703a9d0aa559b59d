"""mru-frecency - Per-caller scoring handle

A picker creates a handle when it opens and scores every candidate through
it. Scoring reads the handle's own snapshot, so it never touches the disk or
the lock and never sees a list that is halfway through a visit.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from mru_frecency.core.models import PickerItem, StoreSnapshot
from mru_frecency.core.strategies import ItemKind
from mru_frecency.storage.store import MRUStore, directory_score_from, score_from_index


logger = logging.getLogger(__name__)

ItemLike = Union[str, PickerItem]


class FrecencyHandle:
    """Snapshot-backed view of an MRUStore"""

    def __init__(self, store: MRUStore):
        self._store = store
        self._snapshot: StoreSnapshot = store.snapshot()

    @property
    def snapshot(self) -> StoreSnapshot:
        return self._snapshot

    def get(self, item: ItemLike, *, seed: bool = True) -> int:
        """
        Current frecency score of an item.

        Args:
            item: Raw string, or a picker item. Picker items with ``dir`` set
                score as the sum of everything tracked below them.
            seed: Ask ``seed()`` for a score when the item is unknown.

        Returns:
            Score between 0 and ``max_entries`` for single items.
        """
        resolved = self._resolve(item)
        if resolved is None:
            return 0
        key, is_dir = resolved

        if is_dir:
            return directory_score_from(
                self._snapshot.entries, self._snapshot.index, key, self._store.max_entries
            )

        if key not in self._snapshot.index:
            return self.seed(item) if seed else 0
        return score_from_index(self._snapshot.index, key, self._store.max_entries)

    def seed(self, item: ItemLike, value: Optional[int] = None) -> int:
        """
        Initial score for an item that has never been visited.

        Unknown items are not registered; they only enter the list when they
        are visited. Subclasses can override this to rank unseen items.
        """
        return 0

    async def visit(self, item: ItemLike) -> bool:
        """Record a visit in the shared store and refresh this handle."""
        target = self._target(item)
        if target is None:
            return False
        raw, kind = target
        saved = await self._store.visit(raw, kind)
        self.refresh()
        return saved

    def refresh(self) -> None:
        """Re-snapshot the store's in-memory list (no disk read)."""
        self._snapshot = self._store.snapshot()

    def _resolve(self, item: ItemLike) -> Optional[tuple[str, bool]]:
        target = self._target(item)
        if target is None:
            return None
        raw, kind = target
        is_dir = isinstance(item, PickerItem) and item.dir
        return self._store.key_for(raw, kind), is_dir

    @staticmethod
    def _target(item: ItemLike) -> Optional[tuple[str, Optional[ItemKind]]]:
        if isinstance(item, PickerItem):
            raw = item.target
            if raw is None:
                return None
            return raw, ItemKind.PATH if item.file else None
        if not item:
            return None
        return item, None
