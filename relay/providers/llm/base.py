"""Completion client interface and response models."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from relay.conversation.models import Thread
from relay.errors import CompletionFailed


class CompletionResult(BaseModel):
    """Outcome of one completion request."""

    text: str = Field(..., description="Reply text, fallback included")
    model: str = Field(..., description="Model that answered")
    is_fallback: bool = Field(
        default=False, description="True when the endpoint gave no usable content"
    )
    finish_reason: str | None = Field(default=None, description="Why generation stopped")
    usage: dict[str, int] | None = Field(default=None, description="Token usage stats")
    raw_response: dict[str, Any] | None = Field(default=None, description="Raw envelope")


class CompletionClient(ABC):
    """Sends a thread to a chat-completion endpoint and returns the reply."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        pass

    @abstractmethod
    async def generate(self, thread: Thread) -> CompletionResult:
        """Run one completion for the thread.

        Raises:
            CompletionFailed: Transport, auth or envelope failure
        """
        pass

    async def complete(self, thread: Thread) -> str:
        """Return the reply text for the thread, stripped of outer whitespace.

        Raises:
            CompletionFailed: The request failed or the reply was blank
        """
        result = await self.generate(thread)
        text = result.text.strip()
        if not text:
            raise CompletionFailed(f"{self.provider_name} returned a blank reply")
        return text

    async def health_check(self) -> bool:
        return True

    async def aclose(self) -> None:
        """Release network resources held by the client."""
        return None
