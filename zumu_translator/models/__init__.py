"""Data models for the SDK."""

from zumu_translator.models.session import (
    SessionConfig,
    TranslationSession,
    ConversationData,
    TranslationMessage,
    SessionState,
    StateKind,
    PlatformContext,
)
from zumu_translator.models.events import (
    SessionStatus,
    ErrorMessage,
    ClientMessage,
    ServerMessage,
)

__all__ = [
    "SessionConfig",
    "TranslationSession",
    "ConversationData",
    "TranslationMessage",
    "SessionState",
    "StateKind",
    "PlatformContext",
    "SessionStatus",
    "ErrorMessage",
    "ClientMessage",
    "ServerMessage",
]
