"""Outbound messaging channels."""

from relay.channels.adapter import OutboundChannel
from relay.channels.mock import RecordingChannel
from relay.channels.models import DeliveryResult, OutboundMessage
from relay.channels.twilio import TwilioMessagingAdapter

__all__ = [
    "DeliveryResult",
    "OutboundChannel",
    "OutboundMessage",
    "RecordingChannel",
    "TwilioMessagingAdapter",
]
