"""relay: chat-channel to AI-completion relay with per-sender conversation memory."""

__version__ = "1.0.0"
