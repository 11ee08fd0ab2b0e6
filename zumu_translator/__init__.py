"""Zumu driver translator SDK."""

__version__ = "1.0.0"

from zumu_translator.errors import ErrorKind, TranslatorError
from zumu_translator.models.session import (
    ConversationData,
    PlatformContext,
    SessionConfig,
    SessionState,
    StateKind,
    TranslationMessage,
    TranslationSession,
)
from zumu_translator.services.session_controller import SessionController

__all__ = [
    "__version__",
    "ErrorKind",
    "TranslatorError",
    "ConversationData",
    "PlatformContext",
    "SessionConfig",
    "SessionState",
    "StateKind",
    "TranslationMessage",
    "TranslationSession",
    "SessionController",
]
