"""Session inspection and reset endpoints."""

from fastapi import APIRouter

from relay.api.dependencies import OrchestratorDep, SessionStoreDep
from relay.api.exceptions import SessionNotFoundError
from relay.api.models.session import ThreadResponse
from relay.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/sessions")


@router.get("/{session_key}", response_model=ThreadResponse)
async def get_session(session_key: str, store: SessionStoreDep) -> ThreadResponse:
    """Return the live thread for a session key.

    Reading does not extend the thread's TTL.
    """
    thread = await store.load(session_key)
    if thread is None:
        raise SessionNotFoundError(f"No active session for {session_key}")
    return ThreadResponse.from_thread(thread)


@router.post("/{session_key}/reset", response_model=ThreadResponse)
async def reset_session(
    session_key: str, orchestrator: OrchestratorDep
) -> ThreadResponse:
    """Discard the conversation so far and start again from the preamble."""
    thread = await orchestrator.reset_session(session_key)
    logger.info("session_reset_requested", session_key=session_key)
    return ThreadResponse.from_thread(thread)
