"""Session inspection response models."""

from datetime import datetime

from pydantic import BaseModel

from relay.conversation.models import Role, Thread


class TurnView(BaseModel):
    role: Role
    text: str
    created_at: datetime


class ThreadResponse(BaseModel):
    """A thread as returned by the sessions API."""

    session_key: str
    turns: list[TurnView]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_thread(cls, thread: Thread) -> "ThreadResponse":
        return cls(
            session_key=thread.session_key,
            turns=[
                TurnView(role=turn.role, text=turn.text, created_at=turn.created_at)
                for turn in thread.turns
            ],
            created_at=thread.created_at,
            updated_at=thread.updated_at,
        )
