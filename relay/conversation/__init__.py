"""Conversation domain: threads, session storage, chunking, orchestration."""

from relay.conversation.chunker import MessageChunker, split_message
from relay.conversation.models import Role, Thread, Turn
from relay.conversation.orchestrator import ConversationOrchestrator
from relay.conversation.store import SessionStore

__all__ = [
    "ConversationOrchestrator",
    "MessageChunker",
    "Role",
    "SessionStore",
    "Thread",
    "Turn",
    "split_message",
]
