"""Completion clients.

- OpenAICompletionClient: OpenAI-compatible chat-completions over httpx
- MockCompletionClient: canned replies for development and tests
"""

from relay.providers.llm.base import CompletionClient, CompletionResult
from relay.providers.llm.mock import MockCompletionClient
from relay.providers.llm.openai import OpenAICompletionClient

__all__ = [
    "CompletionClient",
    "CompletionResult",
    "MockCompletionClient",
    "OpenAICompletionClient",
]
