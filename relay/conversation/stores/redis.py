"""Redis implementation of SessionStore.

Each thread is one JSON string under `{prefix}:{session_key}`, written
with SET ... EX so the TTL restarts on every write. Appends run as
WATCH/MULTI/EXEC transactions: a concurrent writer on the same key makes
EXEC fail and the append is recomputed from the fresh value.
"""

import redis.asyncio as redis
from pydantic import ValidationError

from relay.conversation.models import Thread, Turn
from relay.conversation.store import DEFAULT_TTL_SECONDS, SessionStore
from relay.errors import StoreConflict, StoreUnavailable
from relay.observability.logging import get_logger
from relay.observability.metrics import SESSION_STORE_LATENCY

logger = get_logger(__name__)


class RedisSessionStore(SessionStore):
    """Redis-backed SessionStore with optimistic per-key transactions.

    Key structure:
    - {prefix}:{session_key} - serialized Thread, TTL = ttl_seconds
    """

    def __init__(
        self,
        client: redis.Redis,
        preamble: str,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        key_prefix: str = "relay:session",
        max_cas_retries: int = 5,
    ) -> None:
        """Initialize the store.

        Args:
            client: Shared Redis client
            preamble: System instruction that opens every thread
            ttl_seconds: Absolute TTL applied on each write
            key_prefix: Namespace for thread keys
            max_cas_retries: Transaction attempts before raising StoreConflict
        """
        super().__init__(preamble, ttl_seconds)
        if max_cas_retries < 1:
            raise ValueError(f"max_cas_retries must be at least 1, got {max_cas_retries}")
        self._client = client
        self._prefix = key_prefix
        self._max_cas_retries = max_cas_retries

    @property
    def backend_name(self) -> str:
        return "redis"

    def _key(self, session_key: str) -> str:
        """Build the Redis key for a thread. The session key is used verbatim."""
        return f"{self._prefix}:{session_key}"

    def _deserialize(self, session_key: str, data: str | bytes | None) -> Thread | None:
        if not data:
            return None
        try:
            return Thread.model_validate_json(data)
        except ValidationError as e:
            logger.error(
                "session_corrupt_discarded",
                session_key=session_key,
                error=str(e),
            )
            return None

    async def load(self, session_key: str) -> Thread | None:
        try:
            with SESSION_STORE_LATENCY.labels(self.backend_name, "load").time():
                data = await self._client.get(self._key(session_key))
        except redis.RedisError as e:
            logger.error("session_load_error", session_key=session_key, error=str(e))
            raise StoreUnavailable(f"Failed to load session: {e}", cause=e) from e

        thread = self._deserialize(session_key, data)
        logger.debug("session_loaded", session_key=session_key, found=thread is not None)
        return thread

    async def append(self, session_key: str, turn: Turn) -> Thread:
        key = self._key(session_key)
        try:
            with SESSION_STORE_LATENCY.labels(self.backend_name, "append").time():
                thread = await self._compare_and_swap(session_key, key, turn)
        except redis.RedisError as e:
            logger.error("session_append_error", session_key=session_key, error=str(e))
            raise StoreUnavailable(f"Failed to append to session: {e}", cause=e) from e

        logger.debug(
            "session_appended",
            session_key=session_key,
            role=turn.role.value,
            turns=len(thread),
        )
        return thread

    async def _compare_and_swap(self, session_key: str, key: str, turn: Turn) -> Thread:
        async with self._client.pipeline(transaction=True) as pipe:
            for attempt in range(1, self._max_cas_retries + 1):
                try:
                    await pipe.watch(key)
                    current = self._deserialize(session_key, await pipe.get(key))
                    thread = self._extend(session_key, current, turn)
                    pipe.multi()
                    pipe.set(key, thread.model_dump_json(), ex=self._ttl_seconds)
                    await pipe.execute()
                    return thread
                except redis.WatchError:
                    logger.debug(
                        "session_append_contended",
                        session_key=session_key,
                        attempt=attempt,
                    )
                    await pipe.reset()

        logger.warning(
            "session_append_conflict",
            session_key=session_key,
            attempts=self._max_cas_retries,
        )
        raise StoreConflict(
            f"Session {session_key} kept changing during append "
            f"({self._max_cas_retries} attempts)"
        )

    async def reset(self, session_key: str) -> Thread:
        thread = Thread.start(session_key, self._preamble)
        try:
            with SESSION_STORE_LATENCY.labels(self.backend_name, "reset").time():
                await self._client.set(
                    self._key(session_key),
                    thread.model_dump_json(),
                    ex=self._ttl_seconds,
                )
        except redis.RedisError as e:
            logger.error("session_reset_error", session_key=session_key, error=str(e))
            raise StoreUnavailable(f"Failed to reset session: {e}", cause=e) from e

        logger.info("session_reset", session_key=session_key)
        return thread

    async def health_check(self) -> bool:
        try:
            await self._client.ping()
            return True
        except redis.RedisError as e:
            logger.warning("redis_health_check_failed", error=str(e))
            return False
