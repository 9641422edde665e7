"""Outbound channel protocol."""

from typing import Protocol

from relay.channels.models import DeliveryResult


class OutboundChannel(Protocol):
    """Interface every outbound messaging integration implements.

    Both send paths raise DeliveryFailed when the channel rejects the
    message; nothing is retried.
    """

    @property
    def channel_name(self) -> str:
        """Channel identifier: 'twilio', 'mock', ..."""
        ...

    async def send_message(self, recipient: str, body: str) -> DeliveryResult:
        """Send free-form text to a recipient."""
        ...

    async def send_template(self, recipient: str) -> DeliveryResult:
        """Send the configured pre-approved template to a recipient."""
        ...

    async def aclose(self) -> None:
        ...
