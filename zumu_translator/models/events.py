"""Event models for the UI bridge WebSocket."""

from typing import Literal, Optional, Union
from pydantic import BaseModel, Field

from zumu_translator.models.session import SessionConfig, TranslationMessage


class SessionStatus(BaseModel):
    """Snapshot of the controller's observable state."""
    type: Literal["status"] = "status"
    state: str
    error: Optional[str] = None
    session_id: Optional[str] = None
    is_muted: bool = False
    messages: list[TranslationMessage] = Field(default_factory=list)


class ErrorMessage(BaseModel):
    """Error message."""
    type: Literal["error"] = "error"
    message: str
    code: Optional[str] = None


# Client -> Server messages

class StartSessionMessage(BaseModel):
    """Start session command."""
    type: Literal["start_session"] = "start_session"
    config: SessionConfig


class EndSessionMessage(BaseModel):
    """End session command."""
    type: Literal["end_session"] = "end_session"


class ToggleMuteMessage(BaseModel):
    """Toggle mute command."""
    type: Literal["toggle_mute"] = "toggle_mute"


class SendTextMessage(BaseModel):
    """Send text command."""
    type: Literal["send_message"] = "send_message"
    text: str


class ResetMessage(BaseModel):
    """Reset state command."""
    type: Literal["reset"] = "reset"


# Union types for parsing
ClientMessage = Union[
    StartSessionMessage,
    EndSessionMessage,
    ToggleMuteMessage,
    SendTextMessage,
    ResetMessage,
]

ServerMessage = Union[
    SessionStatus,
    ErrorMessage,
]
