"""mru-frecency - Storage layer: lock file, JSON document and MRU store"""

from .document import DocumentStorage
from .lock import LockGuard
from .store import MRUStore

__all__ = ["DocumentStorage", "LockGuard", "MRUStore"]
