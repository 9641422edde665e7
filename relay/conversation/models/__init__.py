"""Conversation domain models.

- Role: system / user / assistant
- Turn: one immutable message
- Thread: the ordered turns for one sender
"""

from relay.conversation.models.enums import Role
from relay.conversation.models.thread import Thread
from relay.conversation.models.turn import Turn

__all__ = [
    "Role",
    "Thread",
    "Turn",
]
