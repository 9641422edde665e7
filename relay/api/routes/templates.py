"""Template message sending."""

from typing import Annotated

from fastapi import APIRouter, Form, Response

from relay.api.dependencies import OrchestratorDep

router = APIRouter()


@router.post("/templates/send", status_code=202, response_class=Response)
async def send_template(
    orchestrator: OrchestratorDep,
    recipient: Annotated[str, Form(alias="To", min_length=1)],
) -> Response:
    """Send the configured pre-approved template to a recipient.

    Used outside the reply loop, e.g. to reopen a conversation window.
    """
    await orchestrator.send_template(recipient)
    return Response(status_code=202)
