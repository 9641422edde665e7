"""Session stores for conversation threads."""

from relay.conversation.store import SessionStore
from relay.conversation.stores.inmemory import InMemorySessionStore
from relay.conversation.stores.redis import RedisSessionStore

__all__ = [
    "SessionStore",
    "InMemorySessionStore",
    "RedisSessionStore",
]
