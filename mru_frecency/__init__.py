"""mru-frecency - Cross-process most-recently-used tracking for editor pickers"""

from mru_frecency.api import (
    FrecencyContext,
    close,
    get,
    get_context,
    handle,
    recent_items,
    recent_paths,
    setup,
    visit,
    visit_file,
)
from mru_frecency.core.models import Entry, PickerItem
from mru_frecency.handle import FrecencyHandle

__version__ = "0.1.0"
__all__ = [
    "Entry",
    "PickerItem",
    "FrecencyContext",
    "FrecencyHandle",
    "close",
    "get",
    "get_context",
    "handle",
    "recent_items",
    "recent_paths",
    "setup",
    "visit",
    "visit_file",
]
