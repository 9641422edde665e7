"""OpenAI-compatible chat-completion client."""

import time
from typing import Any

import httpx

from relay.config.models.providers import CompletionConfig
from relay.conversation.models import Thread
from relay.errors import CompletionFailed, ConfigurationMissing
from relay.observability.logging import get_logger
from relay.observability.metrics import COMPLETION_FALLBACKS, COMPLETION_LATENCY
from relay.providers.llm.base import CompletionClient, CompletionResult

logger = get_logger(__name__)


class OpenAICompletionClient(CompletionClient):
    """Chat-completion client for OpenAI-style endpoints.

    Holds one httpx.AsyncClient for the life of the process, with the
    bearer token set once at construction. Generation parameters come from
    the frozen CompletionConfig and are identical for every request.

    An answer without usable content is replaced by the configured
    fallback text; transport and status failures raise CompletionFailed.
    """

    def __init__(
        self,
        config: CompletionConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Endpoint, credentials and generation parameters
            client: Pre-built HTTP client (tests inject a mock transport)

        Raises:
            ConfigurationMissing: If the URL or API key is not configured
        """
        if not config.url:
            raise ConfigurationMissing("completion.url")
        if config.api_key is None or not config.api_key.get_secret_value():
            raise ConfigurationMissing("completion.api_key")

        self._config = config
        self._url = config.url
        self._client = client or httpx.AsyncClient(timeout=config.timeout)
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {config.api_key.get_secret_value()}",
        }

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model(self) -> str:
        return self._config.model

    def build_payload(self, thread: Thread) -> dict[str, Any]:
        """Request body for a thread: its messages plus fixed parameters."""
        return {
            "model": self._config.model,
            "messages": thread.to_messages(),
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
            "top_p": self._config.top_p,
            "frequency_penalty": self._config.frequency_penalty,
            "presence_penalty": self._config.presence_penalty,
            "response_format": {"type": "text"},
        }

    async def generate(self, thread: Thread) -> CompletionResult:
        payload = self.build_payload(thread)

        logger.debug(
            "completion_request",
            model=self._config.model,
            num_messages=len(payload["messages"]),
        )

        start = time.perf_counter()
        outcome = "error"
        try:
            response = await self._client.post(self._url, headers=self._headers, json=payload)
            result = self._parse(response)
            outcome = "fallback" if result.is_fallback else "ok"
            return result
        except httpx.HTTPError as e:
            logger.error(
                "completion_transport_error",
                model=self._config.model,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise CompletionFailed(f"Completion request failed: {e}", cause=e) from e
        finally:
            COMPLETION_LATENCY.labels(self._config.model, outcome).observe(
                time.perf_counter() - start
            )

    def _parse(self, response: httpx.Response) -> CompletionResult:
        if not response.is_success:
            logger.error(
                "completion_error_status",
                model=self._config.model,
                status_code=response.status_code,
                error=response.text[:500],
            )
            raise CompletionFailed(
                f"Completion endpoint returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CompletionFailed(
                "Completion endpoint returned a non-JSON body",
                status_code=response.status_code,
                cause=e,
            ) from e

        if not isinstance(data, dict):
            raise CompletionFailed(
                "Completion envelope is not a JSON object",
                status_code=response.status_code,
            )

        choices = data.get("choices")
        if choices is not None and not isinstance(choices, list):
            raise CompletionFailed(
                "Completion envelope has a malformed choices field",
                status_code=response.status_code,
            )

        model = data.get("model") or self._config.model
        usage = data.get("usage") if isinstance(data.get("usage"), dict) else None
        text, finish_reason = _first_choice_text(choices or [])

        if text is None:
            logger.warning(
                "completion_without_content",
                model=model,
                num_choices=len(choices or []),
            )
            COMPLETION_FALLBACKS.labels(self._config.model).inc()
            return CompletionResult(
                text=self._config.fallback_text,
                model=model,
                is_fallback=True,
                finish_reason=finish_reason,
                usage=_int_usage(usage),
                raw_response=data,
            )

        logger.info(
            "completion_received",
            model=model,
            finish_reason=finish_reason,
            reply_length=len(text),
        )
        return CompletionResult(
            text=text,
            model=model,
            finish_reason=finish_reason,
            usage=_int_usage(usage),
            raw_response=data,
        )

    async def aclose(self) -> None:
        await self._client.aclose()


def _first_choice_text(choices: list[Any]) -> tuple[str | None, str | None]:
    """Content and finish reason of the first choice; text is None if unusable."""
    if not choices or not isinstance(choices[0], dict):
        return None, None

    first = choices[0]
    finish_reason = first.get("finish_reason")
    message = first.get("message")
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str) or not content.strip():
        return None, finish_reason
    return content.strip(), finish_reason


def _int_usage(usage: dict[str, Any] | None) -> dict[str, int] | None:
    if usage is None:
        return None
    return {key: value for key, value in usage.items() if isinstance(value, int)}
