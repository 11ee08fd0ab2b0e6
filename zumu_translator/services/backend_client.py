"""HTTP client for the translator backend."""

from typing import Any, Optional
from urllib.parse import quote

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from zumu_translator.config import DEFAULT_BASE_URL
from zumu_translator.errors import TranslatorError
from zumu_translator.models.api import (
    ClientInfo,
    CreateSessionRequest,
    CreateSessionResponse,
    StartConversationRequest,
    StartConversationResponse,
    UpdateSessionStatusRequest,
)
from zumu_translator.models.session import (
    ConversationData,
    SessionConfig,
    TranslationSession,
)

logger = structlog.get_logger()


class BackendClient:
    """Client for the session and conversation REST endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=timeout,
            transport=transport,
        )

    async def create_session(self, config: SessionConfig, client_info: ClientInfo) -> TranslationSession:
        """Create a session record for a trip."""
        body = CreateSessionRequest.from_config(config, client_info)
        data = await self._request("POST", "/api/sessions", body, action="create session")
        response = self._parse(CreateSessionResponse, data, action="create session")

        logger.info("Backend session created",
                   session_id=response.session_id,
                   status=response.status,
                   trip_id=config.trip_id)
        return response.to_session()

    async def start_conversation(self, session_id: str) -> ConversationData:
        """Start the conversation for a session."""
        body = StartConversationRequest(session_id=session_id)
        data = await self._request("POST", "/api/conversations/start", body, action="start conversation")
        response = self._parse(StartConversationResponse, data, action="start conversation")

        logger.info("Conversation started",
                   session_id=session_id,
                   conversation_id=response.conversation_id,
                   agent_id=response.agent_id)
        return response.to_conversation()

    async def update_session_status(self, session_id: str, status: str) -> None:
        """Write a new status for a session."""
        body = UpdateSessionStatusRequest(status=status)
        path = f"/api/sessions/{quote(session_id, safe='')}"
        await self._request("PATCH", path, body, action="update session")
        logger.info("Session status updated", session_id=session_id, status=status)

    async def _request(self, method: str, path: str, body: BaseModel, action: str) -> Any:
        """Send a JSON request and return the decoded JSON response."""
        try:
            response = await self._client.request(
                method,
                path,
                json=body.model_dump(exclude_none=True),
            )
        except httpx.TimeoutException as e:
            logger.error("Backend request timed out", action=action, path=path)
            raise TranslatorError.network_error(f"Failed to {action}: request timed out") from e
        except httpx.TransportError as e:
            logger.error("Backend request failed", action=action, path=path, error=str(e))
            raise TranslatorError.network_error(f"Failed to {action}: {e}") from e

        if not response.is_success:
            error_body = response.text or "No response body"
            logger.error("Backend error",
                        action=action,
                        status=response.status_code,
                        body=error_body)
            raise TranslatorError.api_error(
                f"Failed to {action} (HTTP {response.status_code}): {error_body}"
            )

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise TranslatorError.api_error(f"Failed to {action}: invalid JSON response") from e

    @staticmethod
    def _parse(model: type[BaseModel], data: Any, action: str) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise TranslatorError.api_error(
                f"Failed to {action}: unexpected response ({e.error_count()} invalid fields)"
            ) from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
