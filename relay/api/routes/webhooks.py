"""Inbound messaging webhook.

Twilio posts each inbound WhatsApp/SMS message as a form with `From` and
`Body`. The request is acknowledged with an empty 200 only after the
reply has been generated and handed to the channel; any failure is
returned as an error envelope instead.
"""

from typing import Annotated

from fastapi import APIRouter, Form, Response

from relay.api.dependencies import OrchestratorDep
from relay.observability.logging import (
    bind_session_context,
    clear_session_context,
    get_logger,
)
from relay.observability.metrics import INBOUND_MESSAGES

logger = get_logger(__name__)

router = APIRouter()


@router.post("/webhooks/twilio", status_code=200, response_class=Response)
async def receive_message(
    orchestrator: OrchestratorDep,
    sender: Annotated[str, Form(alias="From", min_length=1)],
    body: Annotated[str, Form(alias="Body")] = "",
) -> Response:
    """Relay one inbound message to the completion endpoint and reply.

    Args:
        orchestrator: Conversation orchestrator
        sender: Channel sender identifier, used verbatim as the session key
        body: Message text
    """
    bind_session_context(sender)
    try:
        INBOUND_MESSAGES.labels("twilio").inc()

        if not body.strip():
            # Media-only messages arrive with an empty Body
            logger.info("inbound_empty_ignored")
            return Response(status_code=200)

        await orchestrator.handle_inbound(sender, body)
        return Response(status_code=200)
    finally:
        clear_session_context()
