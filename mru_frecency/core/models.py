"""mru-frecency - Pydantic models for the persisted MRU document"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Literal, Mapping, Optional, Sequence, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

DOCUMENT_VERSION = 1


class Entry(BaseModel):
    """One visited item.

    ``key`` is always the normalized form. Older documents stored it under
    ``path`` (file-only store) or ``item`` (path-or-text store); both are
    accepted on read and ``item`` is written.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str = Field(
        min_length=1,
        validation_alias=AliasChoices("item", "path", "key"),
        serialization_alias="item",
    )
    timestamp: int = Field(ge=0)
    is_path: bool = True


class Document(BaseModel):
    """On-disk form: ``{"version": 1, "entries": [...]}``"""

    version: Literal[1] = DOCUMENT_VERSION
    entries: List[Entry] = Field(default_factory=list)


class PickerItem(BaseModel):
    """Candidate handed over by a picker.

    ``file`` wins over ``text`` when both are set. ``dir`` marks a directory
    whose score is the sum of the scores of everything tracked beneath it.
    """

    file: Optional[str] = None
    text: Optional[str] = None
    dir: bool = False

    @property
    def target(self) -> Optional[str]:
        return self.file or self.text or None


@dataclass(frozen=True)
class StoreSnapshot:
    """Immutable copy of a store's list and rank index."""

    entries: Tuple[Entry, ...] = ()
    index: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(cls, entries: Sequence[Entry]) -> StoreSnapshot:
        return cls(entries=tuple(entries), index=MappingProxyType(build_index(entries)))


def build_index(entries: Sequence[Entry]) -> dict[str, int]:
    """Map every key to its 1-based rank."""
    return {entry.key: rank for rank, entry in enumerate(entries, start=1)}
