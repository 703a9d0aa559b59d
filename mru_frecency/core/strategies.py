"""Strategy pattern for item classification and key normalization.

The store never decides on its own whether a raw string is a path. It asks an
injected ``Classifier`` and hands the answer to ``KeyNormalizer``:

- PathOrTextClassifier: heuristic for stores that also remember free text
  (search queries, commands)
- PathOnlyClassifier: every item is a file path (picker file history)
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Optional, Protocol, runtime_checkable

from mru_frecency.core.settings import ClassifierKind

PATH_SEPARATORS = ("/", "\\")


class ItemKind(str, Enum):
    PATH = "path"
    TEXT = "text"


# =============================================================================
# Classifier Protocol
# =============================================================================


@runtime_checkable
class Classifier(Protocol):
    """Decides whether a raw item is a filesystem path or opaque text."""

    def classify(self, raw: str) -> ItemKind:
        """Classify a raw item.

        Args:
            raw: Item exactly as the caller passed it.

        Returns:
            ItemKind.PATH or ItemKind.TEXT.
        """
        ...


class PathOrTextClassifier:
    """Heuristic classifier for mixed path/text stores.

    - starts with ``/`` or ``~``: path
    - leading or trailing whitespace: text
    - contains a path separator: path
    - anything else: text
    """

    def classify(self, raw: str) -> ItemKind:
        if raw.startswith(("/", "~")):
            return ItemKind.PATH
        if raw[:1].isspace() or raw[-1:].isspace():
            return ItemKind.TEXT
        if any(sep in raw for sep in PATH_SEPARATORS):
            return ItemKind.PATH
        return ItemKind.TEXT


class PathOnlyClassifier:
    """Treats every item as a path."""

    def classify(self, raw: str) -> ItemKind:
        return ItemKind.PATH


def create_classifier(kind: ClassifierKind) -> Classifier:
    """Build the classifier selected in settings."""
    if kind == ClassifierKind.PATH:
        return PathOnlyClassifier()
    return PathOrTextClassifier()


# =============================================================================
# KeyNormalizer
# =============================================================================


class KeyNormalizer:
    """Turns a classified raw item into its lookup key.

    Paths get ``~`` expanded, ``.``/``..`` collapsed and are made absolute
    against the current working directory. Text is returned unchanged.
    Normalizing an already normalized key is a no-op.
    """

    def __init__(self, classifier: Classifier):
        self.classifier = classifier

    def normalize(self, raw: str, kind: ItemKind) -> str:
        if kind is ItemKind.TEXT:
            return raw
        return os.path.abspath(os.path.expanduser(raw))

    def key_for(self, raw: str, kind: Optional[ItemKind] = None) -> tuple[str, ItemKind]:
        """Classify (unless ``kind`` is given) and normalize in one step.

        Returns:
            (key, kind) for the raw item.
        """
        if kind is None:
            kind = self.classifier.classify(raw)
        return self.normalize(raw, kind), kind
