"""SessionStore abstract interface."""

from abc import ABC, abstractmethod

from relay.conversation.models import Thread, Turn

DEFAULT_TTL_SECONDS = 3600


class SessionStore(ABC):
    """Keyed, TTL-bounded storage of conversation threads.

    Every write stores the whole thread and restarts its TTL; reads never
    extend it. Operations on the same key are linearizable. There is no
    delete: expiry is the only way a thread goes away.
    """

    def __init__(self, preamble: str, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> None:
        if not preamble:
            raise ValueError("preamble must be a non-empty string")
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self._preamble = preamble
        self._ttl_seconds = ttl_seconds

    @property
    def preamble(self) -> str:
        """System instruction that opens every new thread."""
        return self._preamble

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Short backend identifier for logs and metrics."""
        pass

    @abstractmethod
    async def load(self, session_key: str) -> Thread | None:
        """Get the live thread for a key, or None if absent or expired."""
        pass

    @abstractmethod
    async def append(self, session_key: str, turn: Turn) -> Thread:
        """Append a turn, creating the thread with the preamble if needed.

        Returns the thread as written.
        """
        pass

    @abstractmethod
    async def reset(self, session_key: str) -> Thread:
        """Replace the thread with a fresh one holding only the preamble."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check that the backend is reachable."""
        pass

    def _extend(self, session_key: str, current: Thread | None, turn: Turn) -> Thread:
        if current is None:
            current = Thread.start(session_key, self._preamble)
        return current.appended(turn)
