"""Unit tests for ConversationOrchestrator."""

from unittest.mock import AsyncMock

import httpx
import pytest

from relay.channels import RecordingChannel
from relay.config.models import CompletionConfig
from relay.conversation.chunker import MessageChunker
from relay.conversation.models import Role, Thread, Turn
from relay.conversation.orchestrator import ConversationOrchestrator
from relay.conversation.stores import InMemorySessionStore
from relay.errors import (
    CompletionFailed,
    DeliveryFailed,
    ReplyIncomplete,
    StoreUnavailable,
)
from relay.providers.llm import MockCompletionClient, OpenAICompletionClient


def _completion_client(handler) -> OpenAICompletionClient:
    config = CompletionConfig(url="https://llm.test/v1/chat/completions", api_key="sk-test")
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenAICompletionClient(config, client=client)


@pytest.fixture
def completion() -> MockCompletionClient:
    return MockCompletionClient(responses={"Hi": "Hello!"})


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def orchestrator(
    session_store: InMemorySessionStore,
    completion: MockCompletionClient,
    channel: RecordingChannel,
) -> ConversationOrchestrator:
    return ConversationOrchestrator(session_store, completion, channel)


class TestHandleInbound:
    """Tests for the inbound message flow."""

    async def test_first_message_round_trip(
        self,
        orchestrator: ConversationOrchestrator,
        session_store: InMemorySessionStore,
        completion: MockCompletionClient,
        channel: RecordingChannel,
    ) -> None:
        """A new sender gets the reply and a three-turn thread."""
        await orchestrator.handle_inbound("+1555", "Hi")

        assert channel.bodies_for("+1555") == ["Hello!"]
        thread = await session_store.load("+1555")
        assert thread is not None
        assert [(t.role, t.text) for t in thread.turns] == [
            (Role.SYSTEM, session_store.preamble),
            (Role.USER, "Hi"),
            (Role.ASSISTANT, "Hello!"),
        ]
        sent_messages = completion.call_history[0]["messages"]
        assert [m["role"] for m in sent_messages] == ["system", "user"]

    async def test_history_grows_across_messages(
        self,
        orchestrator: ConversationOrchestrator,
        session_store: InMemorySessionStore,
        completion: MockCompletionClient,
    ) -> None:
        """The second request carries the whole conversation so far."""
        await orchestrator.handle_inbound("+1555", "Hi")
        await orchestrator.handle_inbound("+1555", "And now?")

        thread = await session_store.load("+1555")
        assert thread is not None
        assert len(thread) == 5
        assert [m["content"] for m in completion.call_history[1]["messages"]] == [
            session_store.preamble,
            "Hi",
            "Hello!",
            "And now?",
        ]

    async def test_long_reply_sent_in_order(
        self, session_store: InMemorySessionStore, channel: RecordingChannel
    ) -> None:
        """A reply over the limit goes out as ordered chunks."""
        completion = MockCompletionClient(default_response="one two three four five")
        orchestrator = ConversationOrchestrator(
            session_store, completion, channel, MessageChunker(9)
        )

        await orchestrator.handle_inbound("+1555", "count")

        assert channel.bodies_for("+1555") == ["one two", "three", "four five"]
        thread = await session_store.load("+1555")
        assert thread is not None
        assert thread.last_turn.text == "one two three four five"

    async def test_empty_completion_uses_fallback(
        self, session_store: InMemorySessionStore, channel: RecordingChannel
    ) -> None:
        """An endpoint answer without choices still yields a reply."""
        completion = _completion_client(lambda request: httpx.Response(200, json={"choices": []}))
        orchestrator = ConversationOrchestrator(session_store, completion, channel)

        await orchestrator.handle_inbound("+1555", "Hi")

        assert channel.bodies_for("+1555") == ["No idea!"]
        thread = await session_store.load("+1555")
        assert thread is not None
        assert thread.last_turn.role == Role.ASSISTANT
        assert thread.last_turn.text == "No idea!"


class TestFailures:
    """Tests for error propagation and partial outcomes."""

    async def test_completion_failure_records_user_turn_only(
        self, session_store: InMemorySessionStore, channel: RecordingChannel
    ) -> None:
        """A failed completion leaves no assistant turn and sends nothing."""
        completion = _completion_client(lambda request: httpx.Response(500, text="boom"))
        orchestrator = ConversationOrchestrator(session_store, completion, channel)

        with pytest.raises(CompletionFailed) as exc_info:
            await orchestrator.handle_inbound("+1555", "Hi")

        assert exc_info.value.status_code == 500
        assert channel.sent == []
        thread = await session_store.load("+1555")
        assert thread is not None
        assert thread.count(Role.ASSISTANT) == 0
        assert thread.last_turn.text == "Hi"

    async def test_blank_reply_is_not_recorded_or_sent(
        self, session_store: InMemorySessionStore, channel: RecordingChannel
    ) -> None:
        """A whitespace-only reply is a completion failure, not an empty answer."""
        completion = MockCompletionClient(default_response="  ")
        orchestrator = ConversationOrchestrator(session_store, completion, channel)

        with pytest.raises(CompletionFailed):
            await orchestrator.handle_inbound("+1555", "Hi")

        assert channel.sent == []
        thread = await session_store.load("+1555")
        assert thread is not None
        assert thread.count(Role.ASSISTANT) == 0

    async def test_store_unavailable_on_user_turn_propagates(
        self, completion: MockCompletionClient, channel: RecordingChannel
    ) -> None:
        store = AsyncMock()
        store.append.side_effect = StoreUnavailable("redis down")
        orchestrator = ConversationOrchestrator(store, completion, channel)

        with pytest.raises(StoreUnavailable):
            await orchestrator.handle_inbound("+1555", "Hi")

        assert completion.call_history == []
        assert channel.sent == []

    async def test_persist_failure_still_delivers(
        self,
        completion: MockCompletionClient,
        channel: RecordingChannel,
    ) -> None:
        """Losing the assistant turn does not stop the reply going out."""
        store = AsyncMock()
        store.append.side_effect = [
            _thread_after("Hi"),
            StoreUnavailable("redis down"),
        ]
        orchestrator = ConversationOrchestrator(store, completion, channel)

        with pytest.raises(ReplyIncomplete) as exc_info:
            await orchestrator.handle_inbound("+1555", "Hi")

        error = exc_info.value
        assert isinstance(error.persist_error, StoreUnavailable)
        assert error.delivery_error is None
        assert error.chunks_sent == error.chunks_total == 1
        assert channel.bodies_for("+1555") == ["Hello!"]

    async def test_delivery_failure_keeps_assistant_turn(
        self,
        session_store: InMemorySessionStore,
        completion: MockCompletionClient,
    ) -> None:
        """The reply is recorded even when the channel rejects it."""
        channel = RecordingChannel(fail_after=0)
        orchestrator = ConversationOrchestrator(session_store, completion, channel)

        with pytest.raises(ReplyIncomplete) as exc_info:
            await orchestrator.handle_inbound("+1555", "Hi")

        error = exc_info.value
        assert error.persist_error is None
        assert isinstance(error.delivery_error, DeliveryFailed)
        assert error.chunks_sent == 0
        thread = await session_store.load("+1555")
        assert thread is not None
        assert thread.last_turn.text == "Hello!"

    async def test_partial_delivery_stops_at_first_rejection(
        self, session_store: InMemorySessionStore
    ) -> None:
        completion = MockCompletionClient(default_response="aaaa bbbb cccc")
        channel = RecordingChannel(fail_after=1)
        orchestrator = ConversationOrchestrator(
            session_store, completion, channel, MessageChunker(4)
        )

        with pytest.raises(ReplyIncomplete) as exc_info:
            await orchestrator.handle_inbound("+1555", "Hi")

        assert channel.bodies_for("+1555") == ["aaaa"]
        assert exc_info.value.chunks_sent == 1
        assert exc_info.value.chunks_total == 3

    async def test_both_failures_reported(self, completion: MockCompletionClient) -> None:
        store = AsyncMock()
        store.append.side_effect = [
            _thread_after("Hi"),
            StoreUnavailable("redis down"),
        ]
        orchestrator = ConversationOrchestrator(
            store, completion, RecordingChannel(fail_after=0)
        )

        with pytest.raises(ReplyIncomplete) as exc_info:
            await orchestrator.handle_inbound("+1555", "Hi")

        assert exc_info.value.persist_error is not None
        assert exc_info.value.delivery_error is not None
        assert "persistence and delivery" in str(exc_info.value)


class TestTemplatesAndReset:
    async def test_send_template_leaves_session_alone(
        self,
        orchestrator: ConversationOrchestrator,
        session_store: InMemorySessionStore,
        channel: RecordingChannel,
    ) -> None:
        await orchestrator.send_template("+1555")

        assert len(channel.sent) == 1
        assert channel.sent[0].template_sid == "mock-template"
        assert channel.sent[0].body is None
        assert await session_store.load("+1555") is None

    async def test_reset_session(
        self,
        orchestrator: ConversationOrchestrator,
        session_store: InMemorySessionStore,
    ) -> None:
        await orchestrator.handle_inbound("+1555", "Hi")

        thread = await orchestrator.reset_session("+1555")

        assert len(thread) == 1
        loaded = await session_store.load("+1555")
        assert loaded is not None
        assert len(loaded) == 1


def _thread_after(text: str) -> Thread:
    return Thread.start("+1555", "preamble").appended(Turn.user(text))
