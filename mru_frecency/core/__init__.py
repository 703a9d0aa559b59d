"""mru-frecency - Core module exports"""

from .errors import (
    CorruptDocumentError,
    FrecencyError,
    IOUnavailableError,
    LockTimeoutError,
    StoreNotInitializedError,
)
from .models import Document, Entry, PickerItem, StoreSnapshot
from .result import Err, Ok, Result
from .settings import ClassifierKind, LockPolicy, Settings, get_settings, reload_settings
from .strategies import (
    Classifier,
    ItemKind,
    KeyNormalizer,
    PathOnlyClassifier,
    PathOrTextClassifier,
)

__all__ = [
    # Errors
    "FrecencyError",
    "IOUnavailableError",
    "CorruptDocumentError",
    "LockTimeoutError",
    "StoreNotInitializedError",
    # Models
    "Document",
    "Entry",
    "PickerItem",
    "StoreSnapshot",
    # Result
    "Result",
    "Ok",
    "Err",
    # Settings
    "Settings",
    "LockPolicy",
    "ClassifierKind",
    "get_settings",
    "reload_settings",
    # Strategies
    "Classifier",
    "ItemKind",
    "KeyNormalizer",
    "PathOrTextClassifier",
    "PathOnlyClassifier",
]
