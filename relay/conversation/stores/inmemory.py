"""In-memory implementation of SessionStore."""

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass

from relay.conversation.models import Thread, Turn
from relay.conversation.store import DEFAULT_TTL_SECONDS, SessionStore
from relay.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass
class _Entry:
    thread: Thread
    expires_at: float


class InMemorySessionStore(SessionStore):
    """In-memory SessionStore for tests and local development.

    Writes to one key are serialized with a per-key asyncio.Lock, so two
    concurrent appends never lose a turn. State lives in one process only.
    """

    def __init__(
        self,
        preamble: str,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize empty storage.

        Args:
            preamble: System instruction that opens every thread
            ttl_seconds: Absolute TTL applied on each write
            clock: Monotonic time source, replaceable in tests
        """
        super().__init__(preamble, ttl_seconds)
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    @property
    def backend_name(self) -> str:
        return "inmemory"

    def _lock_for(self, session_key: str) -> asyncio.Lock:
        lock = self._locks.get(session_key)
        if lock is None:
            lock = self._locks[session_key] = asyncio.Lock()
        return lock

    def _live(self, session_key: str) -> Thread | None:
        entry = self._entries.get(session_key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            self._forget(session_key)
            return None
        return entry.thread

    def _forget(self, session_key: str) -> None:
        # A held lock belongs to a writer that is about to recreate the entry.
        del self._entries[session_key]
        lock = self._locks.get(session_key)
        if lock is not None and not lock.locked():
            del self._locks[session_key]

    def _write(self, thread: Thread) -> None:
        self._entries[thread.session_key] = _Entry(
            thread=thread,
            expires_at=self._clock() + self._ttl_seconds,
        )

    async def load(self, session_key: str) -> Thread | None:
        return self._live(session_key)

    async def append(self, session_key: str, turn: Turn) -> Thread:
        async with self._lock_for(session_key):
            thread = self._extend(session_key, self._live(session_key), turn)
            self._write(thread)

        logger.debug(
            "session_appended",
            session_key=session_key,
            role=turn.role.value,
            turns=len(thread),
        )
        return thread

    async def reset(self, session_key: str) -> Thread:
        async with self._lock_for(session_key):
            thread = Thread.start(session_key, self._preamble)
            self._write(thread)

        logger.info("session_reset", session_key=session_key)
        return thread

    async def health_check(self) -> bool:
        return True

    def purge_expired(self) -> int:
        """Drop expired threads and their locks, returning how many went."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            self._forget(key)
        return len(expired)
