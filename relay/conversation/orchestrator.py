"""Conversation orchestration: one inbound message to one (chunked) reply.

Flow for each inbound message:
1. Append the user turn (creating the thread if needed)
2. Ask the completion client for a reply
3. Append the assistant turn
4. Send the reply to the sender, chunk by chunk, in order

Store and completion failures in steps 1-2 propagate untouched: nothing is
recorded or sent. Steps 3 and 4 are independent; both are attempted and
their failures are reported side by side in ReplyIncomplete.
"""

from relay.channels.adapter import OutboundChannel
from relay.conversation.chunker import MessageChunker
from relay.conversation.models import Thread, Turn
from relay.conversation.store import SessionStore
from relay.errors import DeliveryFailed, ReplyIncomplete, StoreUnavailable
from relay.observability.logging import get_logger
from relay.observability.metrics import CHUNKS_SENT, ERRORS
from relay.providers.llm.base import CompletionClient

logger = get_logger(__name__)


class ConversationOrchestrator:
    """Coordinates the session store, completion client and outbound channel.

    Holds no per-conversation state: concurrent messages for different
    senders run fully in parallel, and same-sender safety comes from the
    store's per-key linearizability.
    """

    def __init__(
        self,
        session_store: SessionStore,
        completion_client: CompletionClient,
        channel: OutboundChannel,
        chunker: MessageChunker | None = None,
    ) -> None:
        self._store = session_store
        self._completion = completion_client
        self._channel = channel
        self._chunker = chunker or MessageChunker()

    async def handle_inbound(self, session_key: str, message_text: str) -> None:
        """Process one inbound message end to end.

        Raises:
            StoreUnavailable: The user turn could not be recorded
            CompletionFailed: The completion endpoint failed; nothing was sent
            ReplyIncomplete: The reply was computed but not fully persisted or delivered
        """
        thread = await self._store.append(session_key, Turn.user(message_text))
        logger.info("inbound_recorded", session_key=session_key, turns=len(thread))

        reply = await self._completion.complete(thread)

        persist_error = await self._record_reply(session_key, reply)
        chunks = list(self._chunker.split(reply))
        sent, delivery_error = await self._deliver(session_key, chunks)

        if persist_error is not None or delivery_error is not None:
            raise ReplyIncomplete(
                session_key,
                persist_error=persist_error,
                delivery_error=delivery_error,
                chunks_sent=sent,
                chunks_total=len(chunks),
            )

        logger.info(
            "reply_delivered",
            session_key=session_key,
            chunks=sent,
            reply_length=len(reply),
        )

    async def _record_reply(self, session_key: str, reply: str) -> StoreUnavailable | None:
        try:
            await self._store.append(session_key, Turn.assistant(reply))
        except StoreUnavailable as e:
            ERRORS.labels(type(e).__name__).inc()
            logger.error(
                "assistant_turn_not_recorded",
                session_key=session_key,
                error=str(e),
            )
            return e
        return None

    async def _deliver(
        self, session_key: str, chunks: list[str]
    ) -> tuple[int, DeliveryFailed | None]:
        """Send chunks in order, stopping at the first rejection."""
        sent = 0
        for index, chunk in enumerate(chunks):
            try:
                result = await self._channel.send_message(session_key, chunk)
            except DeliveryFailed as e:
                ERRORS.labels(type(e).__name__).inc()
                logger.error(
                    "reply_partially_delivered" if sent else "reply_not_delivered",
                    session_key=session_key,
                    chunks_sent=sent,
                    chunks_total=len(chunks),
                    error=str(e),
                )
                return sent, e

            sent += 1
            CHUNKS_SENT.labels(self._channel.channel_name).inc()
            logger.debug(
                "chunk_sent",
                session_key=session_key,
                index=index,
                length=len(chunk),
                provider_message_id=result.provider_message_id,
            )
        return sent, None

    async def send_template(self, recipient: str) -> None:
        """Send the pre-approved template, e.g. to reopen a messaging window.

        The session is not touched.

        Raises:
            DeliveryFailed: The channel rejected the template message
        """
        result = await self._channel.send_template(recipient)
        logger.info(
            "template_sent",
            session_key=recipient,
            provider_message_id=result.provider_message_id,
        )

    async def reset_session(self, session_key: str) -> Thread:
        """Start the sender's conversation over from the preamble."""
        return await self._store.reset(session_key)
