"""Wire models for the translator backend REST API."""

from typing import Optional

from pydantic import BaseModel

from zumu_translator.models.session import (
    ConversationData,
    SessionConfig,
    TranslationSession,
)


class ClientInfo(BaseModel):
    """Client metadata attached to session creation."""
    platform: str
    sdk_version: str
    device: str


class CreateSessionRequest(BaseModel):
    """POST /api/sessions body."""
    driver_name: str
    driver_language: str
    passenger_name: str
    passenger_language: Optional[str] = None
    trip_id: str
    pickup_location: Optional[str] = None
    dropoff_location: Optional[str] = None
    client_info: ClientInfo

    @classmethod
    def from_config(cls, config: SessionConfig, client_info: ClientInfo) -> "CreateSessionRequest":
        return cls(**config.model_dump(), client_info=client_info)


class CreateSessionResponse(BaseModel):
    """POST /api/sessions response."""
    session_id: str
    status: str
    created_at: str

    def to_session(self) -> TranslationSession:
        return TranslationSession(
            id=self.session_id,
            status=self.status,
            created_at=self.created_at,
        )


class StartConversationRequest(BaseModel):
    """POST /api/conversations/start body."""
    session_id: str


class StartConversationResponse(BaseModel):
    """POST /api/conversations/start response."""
    conversation_id: str
    signed_url: str
    agent_id: str

    def to_conversation(self) -> ConversationData:
        return ConversationData(
            conversation_id=self.conversation_id,
            signed_url=self.signed_url,
            agent_id=self.agent_id,
        )


class UpdateSessionStatusRequest(BaseModel):
    """PATCH /api/sessions/{session_id} body."""
    status: str
