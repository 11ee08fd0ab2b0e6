"""Session models for the translation lifecycle."""

import platform
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from zumu_translator.config import PLATFORM_TAG


class SessionConfig(BaseModel):
    """Trip details supplied by the caller when starting a session."""

    model_config = ConfigDict(frozen=True)

    driver_name: str = Field(..., min_length=1)
    driver_language: str
    passenger_name: str
    passenger_language: Optional[str] = None
    trip_id: str
    pickup_location: Optional[str] = None
    dropoff_location: Optional[str] = None


class TranslationSession(BaseModel):
    """Server-assigned session record."""

    model_config = ConfigDict(frozen=True)

    id: str
    status: str  # mirrored from the server, e.g. created, failed, ended
    created_at: str


class ConversationData(BaseModel):
    """Handshake record returned when a conversation starts."""

    model_config = ConfigDict(frozen=True)

    conversation_id: str
    signed_url: str
    agent_id: str


class TranslationMessage(BaseModel):
    """One message in the conversation transcript."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    role: str  # user, agent
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class StateKind(str, Enum):
    """Session lifecycle state."""
    IDLE = "idle"
    CONNECTING = "connecting"
    ACTIVE = "active"
    DISCONNECTED = "disconnected"
    ENDING = "ending"
    ERROR = "error"


@dataclass(frozen=True)
class SessionState:
    """Current lifecycle state. Only ERROR carries a message."""
    kind: StateKind
    message: Optional[str] = None

    @classmethod
    def error(cls, message: str) -> "SessionState":
        return cls(StateKind.ERROR, message)

    @property
    def is_error(self) -> bool:
        return self.kind == StateKind.ERROR

    def __str__(self) -> str:
        if self.message is not None:
            return f"{self.kind.value}({self.message})"
        return self.kind.value


SessionState.IDLE = SessionState(StateKind.IDLE)
SessionState.CONNECTING = SessionState(StateKind.CONNECTING)
SessionState.ACTIVE = SessionState(StateKind.ACTIVE)
SessionState.DISCONNECTED = SessionState(StateKind.DISCONNECTED)
SessionState.ENDING = SessionState(StateKind.ENDING)


def _describe_device() -> str:
    machine = platform.machine()
    system = platform.system()
    description = " ".join(part for part in (system, machine) if part)
    return description or "unknown"


@dataclass(frozen=True)
class PlatformContext:
    """Client metadata describing where the SDK is running."""
    platform: str = PLATFORM_TAG
    device: str = field(default_factory=_describe_device)

    @classmethod
    def detect(cls) -> "PlatformContext":
        """Build a context from the running interpreter."""
        return cls()
