"""Enums for the conversation domain."""

from enum import Enum


class Role(str, Enum):
    """Who produced a turn."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
