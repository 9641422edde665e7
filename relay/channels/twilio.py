"""Twilio Messages API adapter for WhatsApp and SMS.

Sends through `POST /2010-04-01/Accounts/{sid}/Messages.json` with HTTP
basic auth. Free-form replies carry `Body`; template sends carry
`ContentSid` instead.
"""

import httpx

from relay.channels.models import DeliveryResult, OutboundMessage
from relay.config.models.providers import MessagingConfig
from relay.errors import ConfigurationMissing, DeliveryFailed
from relay.observability.logging import get_logger

logger = get_logger(__name__)


class TwilioMessagingAdapter:
    """Outbound channel backed by the Twilio Messages API."""

    def __init__(
        self,
        config: MessagingConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Account credentials, sender address and template id
            client: Pre-built HTTP client (tests inject a mock transport)

        Raises:
            ConfigurationMissing: If a credential, the sender or the template id is absent
        """
        if not config.account_sid:
            raise ConfigurationMissing("messaging.account_sid")
        if config.auth_token is None or not config.auth_token.get_secret_value():
            raise ConfigurationMissing("messaging.auth_token")
        if not config.sender:
            raise ConfigurationMissing("messaging.sender")
        if not config.template_sid:
            raise ConfigurationMissing("messaging.template_sid")

        self._sender = config.sender
        self._template_sid = config.template_sid
        self._url = (
            f"{config.base_url.rstrip('/')}/2010-04-01/Accounts/{config.account_sid}/Messages.json"
        )
        self._client = client or httpx.AsyncClient(timeout=config.timeout)
        self._auth = httpx.BasicAuth(config.account_sid, config.auth_token.get_secret_value())

    @property
    def channel_name(self) -> str:
        return "twilio"

    async def send_message(self, recipient: str, body: str) -> DeliveryResult:
        return await self._send(OutboundMessage(recipient=recipient, body=body))

    async def send_template(self, recipient: str) -> DeliveryResult:
        return await self._send(
            OutboundMessage(recipient=recipient, template_sid=self._template_sid)
        )

    def _form(self, message: OutboundMessage) -> dict[str, str]:
        form = {"From": self._sender, "To": message.recipient}
        if message.template_sid is not None:
            form["ContentSid"] = message.template_sid
        else:
            form["Body"] = message.body or ""
        return form

    async def _send(self, message: OutboundMessage) -> DeliveryResult:
        kind = "template" if message.template_sid is not None else "text"
        try:
            response = await self._client.post(self._url, data=self._form(message), auth=self._auth)
        except httpx.HTTPError as e:
            logger.error(
                "twilio_transport_error",
                recipient=message.recipient,
                kind=kind,
                error=str(e),
            )
            raise DeliveryFailed(f"Messaging request failed: {e}", cause=e) from e

        if not response.is_success:
            logger.error(
                "twilio_rejected_message",
                recipient=message.recipient,
                kind=kind,
                status_code=response.status_code,
                error=response.text[:500],
            )
            raise DeliveryFailed(
                f"Messaging API returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            data = {}

        result = DeliveryResult(
            provider_message_id=data.get("sid") if isinstance(data, dict) else None,
            status=data.get("status") if isinstance(data, dict) else None,
        )
        logger.debug(
            "twilio_message_accepted",
            recipient=message.recipient,
            kind=kind,
            provider_message_id=result.provider_message_id,
        )
        return result

    async def aclose(self) -> None:
        await self._client.aclose()
