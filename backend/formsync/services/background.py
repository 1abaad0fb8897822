"""
Background Sync
===============

Runs the spreadsheet sync AFTER the real work, without waiting for it.

    record = await run_with_background_sync(
        lambda: store.save(FormType.CONTACT, contact),   # must succeed
        lambda: sync_service.sync_contact(contact),      # best effort
    )

- The primary operation is awaited and its result is returned.
- The sync is handed to a spawner and NOT awaited.
- If the sync blows up, it gets logged. The caller never sees it.
- If the primary operation blows up, the error goes to the caller and
  no sync is started.

Author: Form Sync Team
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

SyncFactory = Callable[[], Awaitable[Any]]


class Spawner(Protocol):
    def spawn(self, factory: SyncFactory) -> Any:
        ...


async def _guarded(factory: SyncFactory):
    try:
        return await factory()
    except Exception as e:
        logger.error(f"Background Google Sheets sync failed: {e}", exc_info=True)
        return False


class BackgroundSyncRunner:
    """
    Default spawner: runs each sync as an asyncio task.

    We keep a reference to every pending task so the event loop can't
    garbage-collect it halfway through, and so shutdown can wait for them.
    """

    def __init__(self):
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, factory: SyncFactory) -> asyncio.Task:
        task = asyncio.create_task(factory())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self):
        """Wait for all pending syncs (used at shutdown and in tests)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


_default_runner: Optional[BackgroundSyncRunner] = None


def get_default_runner() -> BackgroundSyncRunner:
    global _default_runner
    if _default_runner is None:
        _default_runner = BackgroundSyncRunner()
    return _default_runner


async def run_with_background_sync(
    primary: Callable[[], Awaitable[T]],
    sync: SyncFactory,
    spawner: Optional[Spawner] = None,
) -> T:
    """
    Await primary(), start sync() in the background, return primary's result.

    Args:
        primary: The operation that has to succeed (e.g. save to the store)
        sync: The best-effort follow-up (e.g. mirror to Google Sheets)
        spawner: Who runs the sync. Defaults to a shared BackgroundSyncRunner.
                 Anything with a spawn(factory) method works.
    """
    result = await primary()

    spawner = spawner or get_default_runner()
    try:
        spawner.spawn(lambda: _guarded(sync))
    except Exception as e:
        logger.error(f"Could not start background Google Sheets sync: {e}", exc_info=True)

    return result
