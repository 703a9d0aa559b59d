"""mru-frecency - Most-recently-used store shared between processes

One ordered list of entries (most recent first) plus a key → rank index,
persisted in a single JSON document guarded by a lock file. Every visit
reloads the document under the lock before mutating it, so processes see
each other's visits; two processes that both pass the reload before either
saves can still lose one visit (last writer wins).
"""

from __future__ import annotations

import logging
import os
import time
from typing import Callable, Iterator, List, Mapping, Optional, Sequence

from mru_frecency.core.models import Entry, StoreSnapshot, build_index
from mru_frecency.core.settings import LockPolicy, Settings
from mru_frecency.core.strategies import (
    Classifier,
    ItemKind,
    KeyNormalizer,
    PathOrTextClassifier,
    create_classifier,
)
from mru_frecency.storage.document import DocumentStorage
from mru_frecency.storage.lock import LockGuard


logger = logging.getLogger(__name__)


class MRUStore:
    """Bounded MRU list with rank-based scoring"""

    def __init__(
        self,
        document: DocumentStorage,
        lock: LockGuard,
        classifier: Optional[Classifier] = None,
        max_entries: int = 3000,
        lock_policy: LockPolicy = LockPolicy.STRICT,
        clock: Callable[[], float] = time.time,
    ):
        self.document = document
        self.lock = lock
        self.normalizer = KeyNormalizer(classifier or PathOrTextClassifier())
        self.max_entries = max_entries
        self.lock_policy = lock_policy
        self._clock = clock
        self._entries: List[Entry] = []
        self._index: dict[str, int] = {}
        self._dirty = False

    @classmethod
    def from_settings(cls, settings: Settings) -> MRUStore:
        """Build a store wired to the document and lock paths in ``settings``."""
        return cls(
            document=DocumentStorage(settings.document_path(), max_entries=settings.max_entries),
            lock=LockGuard(
                settings.lock_path(),
                timeout=settings.lock_timeout,
                poll_interval=settings.lock_poll_interval,
                stale_after=settings.lock_stale_after_s,
            ),
            classifier=create_classifier(settings.classifier),
            max_entries=settings.max_entries,
            lock_policy=settings.lock_policy,
        )

    @property
    def dirty(self) -> bool:
        """True when the last save failed and the disk is behind memory."""
        return self._dirty

    def __len__(self) -> int:
        return len(self._entries)

    async def load(self) -> bool:
        """
        Load the persisted document, replacing the in-memory list.

        A corrupt or unreadable document resets the store to empty.

        Returns:
            True if the document was read (or did not exist yet).
        """
        locked = await self.lock.acquire()
        try:
            result = await self.document.load()
        finally:
            if locked:
                await self.lock.release()

        if result.is_err():
            logger.warning(f"{result.error}; starting with an empty frecency list")
            self._set_entries([])
            return False

        self._set_entries(result.unwrap())
        logger.info(f"Loaded {len(self._entries)} frecency entries from {self.document.path}")
        return True

    async def visit(self, raw: Optional[str], kind: Optional[ItemKind] = None) -> bool:
        """
        Move an item to the front of the list and persist it.

        Args:
            raw: Path or text as given by the caller.
            kind: Skip classification and treat the item as this kind.

        Returns:
            True if the visit was saved. False for empty items, a strict
            lock timeout, or a failed save (the in-memory list is updated
            in that last case).
        """
        if not raw:
            return False

        key, kind = self.normalizer.key_for(raw, kind)

        locked = await self.lock.acquire()
        if not locked:
            if self.lock_policy is LockPolicy.STRICT:
                logger.warning(f"Dropping visit of {key!r}: lock busy")
                return False
            logger.warning(f"Visiting {key!r} without the lock")

        try:
            result = await self.document.load()
            if result.is_ok():
                self._set_entries(result.unwrap())
            else:
                logger.warning(f"{result.error}; keeping the in-memory frecency list")

            self._push(Entry(key=key, timestamp=int(self._clock()), is_path=kind is ItemKind.PATH))
            logger.debug(f"Visited {key!r}")
            return await self._save()
        finally:
            if locked:
                await self.lock.release()

    async def visit_file(self, path: Optional[str]) -> bool:
        """Visit ``path`` only if it names an existing regular file."""
        if not path or not os.path.isfile(os.path.expanduser(path)):
            return False
        return await self.visit(path, ItemKind.PATH)

    async def close(self) -> bool:
        """
        Flush the in-memory list if the last save did not make it to disk.

        Returns:
            True if nothing was pending or the flush succeeded.
        """
        if not self._dirty:
            return True

        locked = await self.lock.acquire()
        if not locked and self.lock_policy is LockPolicy.STRICT:
            logger.warning(f"Could not flush {self.document.path} on close: lock busy")
            return False
        try:
            return await self._save()
        finally:
            if locked:
                await self.lock.release()

    def key_for(self, raw: str, kind: Optional[ItemKind] = None) -> str:
        """Normalized lookup key for a raw item."""
        return self.normalizer.key_for(raw, kind)[0]

    def score(self, key: str) -> int:
        """``max_entries - rank + 1`` for a tracked key, else 0."""
        return score_from_index(self._index, key, self.max_entries)

    def score_item(self, raw: str) -> int:
        """Score of a raw, not yet normalized item."""
        return self.score(self.key_for(raw))

    def directory_score(self, dir_path: str) -> int:
        """Sum of the scores of every entry below ``dir_path``."""
        return directory_score_from(self._entries, self._index, dir_path, self.max_entries)

    def iter_recent_paths(self) -> Iterator[str]:
        return (entry.key for entry in self._entries if entry.is_path)

    def recent_paths(self) -> List[str]:
        """Keys of path entries, most recent first."""
        return list(self.iter_recent_paths())

    def recent_items(self) -> List[Entry]:
        """Copy of every entry, most recent first."""
        return [entry.model_copy() for entry in self._entries]

    def snapshot(self) -> StoreSnapshot:
        """Immutable view of the current list and index."""
        return StoreSnapshot.build(self._entries)

    def _push(self, entry: Entry) -> None:
        rank = self._index.get(entry.key)
        entries = list(self._entries)
        if rank is not None:
            del entries[rank - 1]
        entries.insert(0, entry)
        del entries[self.max_entries:]
        self._set_entries(entries)

    def _set_entries(self, entries: List[Entry]) -> None:
        self._entries = entries
        self._index = build_index(entries)

    async def _save(self) -> bool:
        result = await self.document.save(self._entries)
        if result.is_err():
            logger.warning(f"Failed to save frecency list: {result.error}")
            self._dirty = True
            return False
        self._dirty = False
        return True


def score_from_index(index: Mapping[str, int], key: str, max_entries: int) -> int:
    rank = index.get(key)
    if rank is None:
        return 0
    return max_entries - rank + 1


def directory_score_from(
    entries: Sequence[Entry], index: Mapping[str, int], dir_path: str, max_entries: int
) -> int:
    prefix = dir_path.rstrip("/\\") + os.sep
    return sum(
        score_from_index(index, entry.key, max_entries)
        for entry in entries
        if entry.key.startswith(prefix)
    )
