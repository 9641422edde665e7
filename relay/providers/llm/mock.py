"""Mock completion client for development and tests."""

from typing import Any

from relay.conversation.models import Role, Thread
from relay.providers.llm.base import CompletionClient, CompletionResult


class MockCompletionClient(CompletionClient):
    """Returns configured replies without calling any endpoint.

    Replies are looked up by the text of the thread's last user turn;
    anything unmatched gets `default_response`.
    """

    def __init__(
        self,
        default_response: str = "Mock response",
        default_model: str = "mock-model",
        responses: dict[str, str] | None = None,
    ) -> None:
        self._default_response = default_response
        self._default_model = default_model
        self._responses = responses or {}
        self._call_history: list[dict[str, Any]] = []

    @property
    def provider_name(self) -> str:
        return "mock"

    @property
    def call_history(self) -> list[dict[str, Any]]:
        """Messages sent on each call, for test assertions."""
        return self._call_history

    def set_response(self, trigger: str, response: str) -> None:
        self._responses[trigger] = response

    async def generate(self, thread: Thread) -> CompletionResult:
        messages = thread.to_messages()
        self._call_history.append({"messages": messages, "model": self._default_model})

        last_user = next(
            (turn.text for turn in reversed(thread.turns) if turn.role == Role.USER),
            None,
        )
        text = self._default_response
        if last_user is not None:
            text = self._responses.get(last_user, self._default_response)

        return CompletionResult(
            text=text,
            model=self._default_model,
            finish_reason="stop",
            usage={
                "prompt_tokens": sum(len(m["content"]) // 4 for m in messages),
                "completion_tokens": len(text) // 4,
            },
        )
