"""Recording channel for local development and tests."""

from uuid import uuid4

from relay.channels.models import DeliveryResult, OutboundMessage
from relay.errors import DeliveryFailed
from relay.observability.logging import get_logger

logger = get_logger(__name__)


class RecordingChannel:
    """Keeps every outbound message in memory instead of sending it.

    `fail_after` makes the channel reject every message once that many
    have been accepted, which is how partial delivery is exercised.
    """

    def __init__(self, template_sid: str = "mock-template", fail_after: int | None = None) -> None:
        self._template_sid = template_sid
        self._fail_after = fail_after
        self.sent: list[OutboundMessage] = []

    @property
    def channel_name(self) -> str:
        return "mock"

    def bodies_for(self, recipient: str) -> list[str]:
        return [m.body for m in self.sent if m.recipient == recipient and m.body is not None]

    async def send_message(self, recipient: str, body: str) -> DeliveryResult:
        return self._record(OutboundMessage(recipient=recipient, body=body))

    async def send_template(self, recipient: str) -> DeliveryResult:
        return self._record(OutboundMessage(recipient=recipient, template_sid=self._template_sid))

    def _record(self, message: OutboundMessage) -> DeliveryResult:
        if self._fail_after is not None and len(self.sent) >= self._fail_after:
            raise DeliveryFailed("Recording channel configured to reject", status_code=400)
        self.sent.append(message)
        logger.info(
            "mock_message_recorded",
            recipient=message.recipient,
            body=message.body,
            template_sid=message.template_sid,
        )
        return DeliveryResult(provider_message_id=f"mock-{uuid4().hex[:12]}", status="queued")

    async def aclose(self) -> None:
        return None
