"""Dependency injection for API routes.

Builds the shared Redis client, session store, completion client, outbound
channel and orchestrator once per process. Routes depend on these
functions, and tests replace them through `app.dependency_overrides`.

A required setting that is missing raises ConfigurationMissing from the
component's constructor; nothing falls back to a mock silently.
"""

from typing import Annotated

import redis.asyncio as redis
from fastapi import Depends

from relay.channels import OutboundChannel, RecordingChannel, TwilioMessagingAdapter
from relay.config import get_settings
from relay.config.settings import Settings
from relay.conversation.chunker import MessageChunker
from relay.conversation.orchestrator import ConversationOrchestrator
from relay.conversation.store import SessionStore
from relay.conversation.stores import InMemorySessionStore, RedisSessionStore
from relay.errors import ConfigurationMissing
from relay.observability.logging import get_logger
from relay.providers.llm import (
    CompletionClient,
    MockCompletionClient,
    OpenAICompletionClient,
)

logger = get_logger(__name__)

_redis_client: redis.Redis | None = None
_session_store: SessionStore | None = None
_completion_client: CompletionClient | None = None
_channel: OutboundChannel | None = None
_orchestrator: ConversationOrchestrator | None = None


def get_redis_client() -> redis.Redis:
    """Get the shared Redis client (connections are opened lazily)."""
    global _redis_client
    if _redis_client is None:
        url = get_settings().storage.session.connection_url
        if not url:
            raise ConfigurationMissing("storage.session.connection_url")
        _redis_client = redis.from_url(url, decode_responses=True)
        logger.info("redis_client_created", url=url.split("@")[-1])
    return _redis_client


def get_session_store() -> SessionStore:
    """Get the SessionStore selected by storage.session.backend."""
    global _session_store
    if _session_store is None:
        settings = get_settings()
        config = settings.storage.session
        preamble = settings.completion.system_prompt
        if config.backend == "redis":
            _session_store = RedisSessionStore(
                get_redis_client(),
                preamble=preamble,
                ttl_seconds=config.ttl_seconds,
                key_prefix=config.key_prefix,
                max_cas_retries=config.max_cas_retries,
            )
        else:
            _session_store = InMemorySessionStore(preamble, ttl_seconds=config.ttl_seconds)
        logger.info(
            "session_store_initialized",
            store_type=config.backend,
            ttl_seconds=config.ttl_seconds,
        )
    return _session_store


def get_completion_client() -> CompletionClient:
    """Get the completion client selected by completion.provider."""
    global _completion_client
    if _completion_client is None:
        config = get_settings().completion
        if config.provider == "mock":
            _completion_client = MockCompletionClient()
        else:
            _completion_client = OpenAICompletionClient(config)
        logger.info(
            "completion_client_initialized",
            provider=config.provider,
            model=config.model,
        )
    return _completion_client


def get_channel() -> OutboundChannel:
    """Get the outbound channel selected by messaging.provider."""
    global _channel
    if _channel is None:
        config = get_settings().messaging
        if config.provider == "mock":
            _channel = RecordingChannel(template_sid=config.template_sid or "mock-template")
        else:
            _channel = TwilioMessagingAdapter(config)
        logger.info("channel_initialized", provider=config.provider)
    return _channel


def get_orchestrator() -> ConversationOrchestrator:
    """Get the conversation orchestrator wired to the shared components."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = ConversationOrchestrator(
            session_store=get_session_store(),
            completion_client=get_completion_client(),
            channel=get_channel(),
            chunker=MessageChunker(get_settings().messaging.max_chunk_size),
        )
        logger.info("orchestrator_initialized")
    return _orchestrator


SettingsDep = Annotated[Settings, Depends(get_settings)]
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]
CompletionClientDep = Annotated[CompletionClient, Depends(get_completion_client)]
ChannelDep = Annotated[OutboundChannel, Depends(get_channel)]
OrchestratorDep = Annotated[ConversationOrchestrator, Depends(get_orchestrator)]


async def reset_dependencies() -> None:
    """Close shared clients and forget every cached component."""
    global _redis_client, _session_store, _completion_client, _channel, _orchestrator

    if _completion_client is not None:
        await _completion_client.aclose()
    if _channel is not None:
        await _channel.aclose()
    if _redis_client is not None:
        await _redis_client.aclose()

    _redis_client = None
    _session_store = None
    _completion_client = None
    _channel = None
    _orchestrator = None
    get_settings.cache_clear()
