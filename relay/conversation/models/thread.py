"""Thread model: the ordered turns exchanged with one sender."""

from datetime import datetime

from pydantic import BaseModel, Field

from relay.conversation.models.enums import Role
from relay.conversation.models.turn import Turn, utc_now


class Thread(BaseModel):
    """Ordered sequence of turns for one session key.

    A fresh thread always opens with the system preamble. Turns are only
    ever appended; the store owns the canonical copy and callers work on
    the copy returned to them.
    """

    session_key: str = Field(..., min_length=1, description="Channel sender identifier")
    turns: list[Turn] = Field(default_factory=list, description="Turns in arrival order")
    created_at: datetime = Field(default_factory=utc_now, description="Creation time")
    updated_at: datetime = Field(default_factory=utc_now, description="Last write time")

    @classmethod
    def start(cls, session_key: str, preamble: str) -> "Thread":
        """Create a thread holding only the system preamble."""
        return cls(session_key=session_key, turns=[Turn.system(preamble)])

    def appended(self, turn: Turn) -> "Thread":
        """Return a copy of this thread with `turn` added at the end."""
        return self.model_copy(
            update={"turns": [*self.turns, turn], "updated_at": utc_now()}
        )

    @property
    def last_turn(self) -> Turn | None:
        return self.turns[-1] if self.turns else None

    def count(self, role: Role) -> int:
        return sum(1 for turn in self.turns if turn.role == role)

    def to_messages(self) -> list[dict[str, str]]:
        """Ordered {role, content} pairs in chat-completion format."""
        return [{"role": turn.role.value, "content": turn.text} for turn in self.turns]

    def __len__(self) -> int:
        return len(self.turns)
