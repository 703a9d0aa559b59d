"""mru-frecency - Advisory lock file shared between editor processes

The lock is a sidecar file next to the document. Creating it in exclusive
mode means "held"; its content is the owner's pid, used only to tell whether
a lock left behind by a crashed process can be broken.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import time
from pathlib import Path
from types import TracebackType
from typing import Optional

import aiofiles
import aiofiles.os

from mru_frecency.core.errors import LockTimeoutError

logger = logging.getLogger(__name__)


class LockGuard:
    """Sentinel-file lock with stale-lock recovery.

    Waiting is done with ``asyncio.sleep`` so other tasks on the event loop
    keep running while another process holds the lock.
    """

    def __init__(
        self,
        lock_path: Path,
        timeout: float = 1.0,
        poll_interval: float = 0.05,
        stale_after: float = 5.0,
    ):
        self.lock_path = Path(lock_path)
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.stale_after = stale_after
        self._held = False

    @property
    def held(self) -> bool:
        return self._held

    async def acquire(
        self, timeout: Optional[float] = None, poll_interval: Optional[float] = None
    ) -> bool:
        """
        Try to take the lock.

        Args:
            timeout: Seconds to keep retrying; defaults to the guard's timeout.
            poll_interval: Seconds between attempts; defaults to the guard's interval.

        Returns:
            True if the lock is now held by this guard, False on timeout.
        """
        timeout = self.timeout if timeout is None else timeout
        poll_interval = self.poll_interval if poll_interval is None else poll_interval
        deadline = time.monotonic() + timeout

        while True:
            try:
                created = await self._try_create()
            except OSError as e:
                logger.warning(f"Cannot create lock file {self.lock_path}: {e}")
                return False
            if created:
                self._held = True
                logger.debug(f"Lock acquired: {self.lock_path}")
                return True

            if await self._break_if_stale():
                continue

            if time.monotonic() >= deadline:
                logger.warning(f"Timed out after {timeout:.3f}s waiting for lock: {self.lock_path}")
                return False
            await asyncio.sleep(poll_interval)

    async def release(self) -> None:
        """Remove the lock file. A lock that is already gone counts as released."""
        if not self._held:
            return
        self._held = False
        try:
            await aiofiles.os.remove(self.lock_path)
        except FileNotFoundError:
            pass
        logger.debug(f"Lock released: {self.lock_path}")

    async def _try_create(self) -> bool:
        try:
            await aiofiles.os.makedirs(self.lock_path.parent, exist_ok=True)
            async with aiofiles.open(self.lock_path, mode="x") as f:
                await f.write(str(os.getpid()))
            return True
        except FileExistsError:
            return False

    async def _break_if_stale(self) -> bool:
        """
        Remove the lock if it is old and its owner is gone.

        Returns:
            True if the caller should retry immediately.
        """
        try:
            stat = await aiofiles.os.stat(self.lock_path)
        except FileNotFoundError:
            # Released between our create attempt and the stat
            return True

        age = time.time() - stat.st_mtime
        if age <= self.stale_after:
            return False

        pid = await self._read_owner_pid()
        if pid is not None and _pid_alive(pid):
            return False

        # Another waiter may have broken and re-created the lock meanwhile.
        # The window between this check and the remove below stays open.
        try:
            current = await aiofiles.os.stat(self.lock_path)
        except FileNotFoundError:
            return True
        if (current.st_ino, current.st_mtime_ns) != (stat.st_ino, stat.st_mtime_ns):
            return True

        try:
            await aiofiles.os.remove(self.lock_path)
        except FileNotFoundError:
            pass
        logger.info(f"Removed stale lock {self.lock_path} (owner pid {pid}, age {age:.1f}s)")
        return True

    async def _read_owner_pid(self) -> Optional[int]:
        try:
            async with aiofiles.open(self.lock_path, mode="r") as f:
                content = await f.read()
            return int(content.strip())
        except (OSError, ValueError):
            return None

    async def __aenter__(self) -> LockGuard:
        if not await self.acquire():
            raise LockTimeoutError(
                f"Lock timeout ({self.timeout}s) for: {self.lock_path}", path=str(self.lock_path)
            )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.release()

    def __repr__(self) -> str:
        return f"LockGuard({str(self.lock_path)!r}, held={self._held})"


def _pid_alive(pid: int) -> bool:
    """Probe a pid with signal 0. Where that is unsupported the owner is assumed dead."""
    if pid <= 0 or sys.platform == "win32":
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    except OSError:
        return False
    return True
