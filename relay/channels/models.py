"""Channel message models."""

from typing import Any

from pydantic import BaseModel, Field


class OutboundMessage(BaseModel):
    """One message handed to a channel.

    Exactly one of `body` or `template_sid` is set.
    """

    recipient: str = Field(..., min_length=1, description="Recipient address (the session key)")
    body: str | None = Field(default=None, description="Free-form text")
    template_sid: str | None = Field(default=None, description="Pre-approved template id")
    metadata: dict[str, Any] = Field(default_factory=dict)


class DeliveryResult(BaseModel):
    """Channel acknowledgement for an accepted message."""

    provider_message_id: str | None = Field(default=None, description="Provider's id")
    status: str | None = Field(default=None, description="Provider-reported status")
