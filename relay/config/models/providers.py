"""Completion and messaging provider configuration models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr

CompletionProviderType = Literal["openai", "mock"]
MessagingProviderType = Literal["twilio", "mock"]

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant answering chat messages. "
    "Keep replies concise and in plain text."
)


class CompletionConfig(BaseModel):
    """Chat-completion endpoint and fixed generation parameters.

    Frozen: a client receives one of these at construction and it never
    changes for the life of the client.
    """

    model_config = ConfigDict(frozen=True)

    provider: CompletionProviderType = Field(default="openai", description="Provider type")
    url: str | None = Field(
        default=None,
        description="Full chat-completions endpoint URL",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="API key (prefer RELAY_COMPLETION__API_KEY)",
    )
    model: str = Field(default="gpt-4o-mini", description="Model identifier")
    temperature: float = Field(default=1.0, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2048, gt=0)
    top_p: float = Field(default=1.0, ge=0.0, le=1.0)
    frequency_penalty: float = Field(default=0.0, ge=-2.0, le=2.0)
    presence_penalty: float = Field(default=0.0, ge=-2.0, le=2.0)
    timeout: float = Field(default=60.0, gt=0, description="Request timeout in seconds")
    fallback_text: str = Field(
        default="No idea!",
        min_length=1,
        description="Reply used when the endpoint answers without usable content",
    )
    system_prompt: str = Field(
        default=DEFAULT_SYSTEM_PROMPT,
        min_length=1,
        description="Preamble that opens every new thread",
    )


class MessagingConfig(BaseModel):
    """Outbound messaging channel credentials and limits."""

    model_config = ConfigDict(frozen=True)

    provider: MessagingProviderType = Field(default="twilio", description="Provider type")
    base_url: str = Field(
        default="https://api.twilio.com",
        description="Messaging API base URL",
    )
    account_sid: str | None = Field(default=None, description="Account identifier")
    auth_token: SecretStr | None = Field(
        default=None,
        description="Auth secret (prefer RELAY_MESSAGING__AUTH_TOKEN)",
    )
    sender: str | None = Field(
        default=None,
        description="Fixed sender address, e.g. whatsapp:+14155238886",
    )
    template_sid: str | None = Field(
        default=None,
        description="Pre-approved template identifier",
    )
    max_chunk_size: int = Field(
        default=1600,
        gt=0,
        description="Maximum characters per outbound message",
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
