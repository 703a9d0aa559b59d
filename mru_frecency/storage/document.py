"""mru-frecency - JSON document persistence

Reads and writes ``{"version": 1, "entries": [...]}``. Loading never raises:
a missing or empty file is an empty list, anything unparseable comes back as
an ``Err`` the store can log and recover from. Saving goes through a
temporary file in the same directory that is renamed over the target, so a
crash mid-write leaves the previous document intact.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List

import aiofiles
import aiofiles.os
from pydantic import ValidationError

from mru_frecency.core.errors import CorruptDocumentError, IOUnavailableError
from mru_frecency.core.models import Document, Entry
from mru_frecency.core.result import Err, Ok, Result


logger = logging.getLogger(__name__)


class DocumentStorage:
    """Persistence for one MRU document"""

    def __init__(self, path: Path, max_entries: int = 3000):
        self.path = Path(path)
        self.max_entries = max_entries

    async def load(self) -> Result[List[Entry]]:
        """
        Read the document from disk.

        Returns:
            Ok with the entries (most recent first), Ok([]) when the file is
            missing or empty, Err with code CORRUPT_DOCUMENT or IO_UNAVAILABLE
            otherwise.
        """
        try:
            async with aiofiles.open(self.path, mode="r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            return Ok([])
        except (OSError, UnicodeDecodeError) as e:
            return Err(
                f"Cannot read {self.path}: {e}",
                code=IOUnavailableError.code,
                path=str(self.path),
            )

        if not content.strip():
            return Ok([])

        try:
            document = Document.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as e:
            return Err(
                f"Invalid frecency document {self.path}: {e}",
                code=CorruptDocumentError.code,
                path=str(self.path),
            )

        return Ok(self._repair(document.entries))

    async def save(self, entries: List[Entry]) -> Result[Path]:
        """
        Replace the document on disk with ``entries``.

        Returns:
            Ok with the document path, or Err with code IO_UNAVAILABLE.
        """
        document = Document(entries=list(entries))
        content = json.dumps(document.model_dump(mode="json", by_alias=True), ensure_ascii=False)

        tmp_name = None
        try:
            await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
            mode = await self._file_mode()
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            os.close(fd)
            # mkstemp creates 0600; keep the document's own mode across the replace
            os.chmod(tmp_name, mode)
            async with aiofiles.open(tmp_name, mode="w", encoding="utf-8") as f:
                await f.write(content)
                await f.flush()
                os.fsync(f.fileno())
            await aiofiles.os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None:
                await _remove_quietly(Path(tmp_name))
            return Err(
                f"Cannot write {self.path}: {e}",
                code=IOUnavailableError.code,
                path=str(self.path),
            )

        return Ok(self.path)

    async def _file_mode(self) -> int:
        """Permission bits of the existing document, else 0666 minus the umask."""
        try:
            stat = await aiofiles.os.stat(self.path)
        except FileNotFoundError:
            return 0o666 & ~_current_umask()
        return stat.st_mode & 0o777

    def _repair(self, entries: List[Entry]) -> List[Entry]:
        """Drop duplicate keys (first one wins) and trim to ``max_entries``."""
        seen = set()
        repaired = []
        for entry in entries:
            if entry.key in seen:
                continue
            seen.add(entry.key)
            repaired.append(entry)
            if len(repaired) == self.max_entries:
                break
        if len(repaired) != len(entries):
            logger.debug(
                f"Repaired {self.path}: {len(entries)} stored entries, {len(repaired)} kept"
            )
        return repaired


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


async def _remove_quietly(path: Path) -> None:
    try:
        await aiofiles.os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temporary file {path}: {e}")
