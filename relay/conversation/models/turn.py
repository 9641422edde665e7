"""Turn model: one role-tagged message in a conversation."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from relay.conversation.models.enums import Role


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class Turn(BaseModel):
    """A single message in a thread. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(..., description="Who produced the message")
    text: str = Field(..., min_length=1, description="Message content")
    created_at: datetime = Field(default_factory=utc_now, description="Creation time")

    @classmethod
    def system(cls, text: str) -> "Turn":
        return cls(role=Role.SYSTEM, text=text)

    @classmethod
    def user(cls, text: str) -> "Turn":
        return cls(role=Role.USER, text=text)

    @classmethod
    def assistant(cls, text: str) -> "Turn":
        return cls(role=Role.ASSISTANT, text=text)
