"""Session controller for the translation lifecycle."""

from typing import Optional

import httpx
import structlog

from zumu_translator.config import (
    DEFAULT_BASE_URL,
    SDK_VERSION,
    STATUS_ENDED,
    STATUS_FAILED,
    Settings,
)
from zumu_translator.errors import TranslatorError
from zumu_translator.models.api import ClientInfo
from zumu_translator.models.session import (
    PlatformContext,
    SessionConfig,
    SessionState,
    TranslationMessage,
    TranslationSession,
)
from zumu_translator.services.backend_client import BackendClient
from zumu_translator.services.message_transport import MessageTransport, OutboundMessageQueue
from zumu_translator.utils.observable import ObservableValue, ReadOnlyObservable

logger = structlog.get_logger()


class SessionController:
    """Drives at most one translation session and publishes its state.

    The controller is meant to be driven from a single event loop. A second
    ``start_session`` call while one is in flight is rejected rather than
    queued. If the caller cancels ``start_session`` mid-flight, the state
    may be left in CONNECTING; ``reset_state`` recovers from that.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        backend: Optional[BackendClient] = None,
        message_transport: Optional[MessageTransport] = None,
    ):
        if backend is None:
            if not api_key:
                raise ValueError("api_key is required when no backend client is given")
            backend = BackendClient(api_key, base_url, timeout=timeout, transport=transport)
        self.backend = backend
        self.message_transport = (
            message_transport if message_transport is not None else OutboundMessageQueue()
        )

        self._state: ObservableValue[SessionState] = ObservableValue(SessionState.IDLE, name="state")
        self._messages: ObservableValue[tuple[TranslationMessage, ...]] = ObservableValue((), name="messages")
        self._is_muted: ObservableValue[bool] = ObservableValue(False, name="is_muted")

        self.current_session: Optional[TranslationSession] = None
        self._start_in_flight = False
        # Bumped by reset_state so an in-flight start can tell it was abandoned
        self._generation = 0

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "SessionController":
        """Build a controller from SDK settings."""
        return cls(
            settings.api_key,
            settings.base_url,
            timeout=settings.request_timeout_seconds,
            **kwargs,
        )

    # Observable state

    @property
    def state(self) -> ReadOnlyObservable[SessionState]:
        return self._state.as_readonly()

    @property
    def messages(self) -> ReadOnlyObservable[tuple[TranslationMessage, ...]]:
        return self._messages.as_readonly()

    @property
    def is_muted(self) -> ReadOnlyObservable[bool]:
        return self._is_muted.as_readonly()

    # Session management

    async def start_session(
        self,
        config: SessionConfig,
        platform_context: Optional[PlatformContext] = None,
    ) -> TranslationSession:
        """Create a backend session and start its conversation.

        On any failure the partially created session is marked failed on
        the backend, the controller returns to IDLE, and the failure is
        raised as an API error so the caller can retry straight away.
        A ``reset_state`` issued while the start is in flight abandons it:
        the created session is marked failed and INVALID_STATE is raised.
        """
        if self._start_in_flight:
            raise TranslatorError.invalid_state("Session start already in progress")

        if self._state.value != SessionState.IDLE:
            raise TranslatorError.invalid_state(
                f"Cannot start session while in state: {self._state.value}"
            )

        self._start_in_flight = True
        generation = self._generation
        self._state.set(SessionState.CONNECTING)
        context = platform_context or PlatformContext.detect()
        client_info = ClientInfo(
            platform=context.platform,
            sdk_version=SDK_VERSION,
            device=context.device,
        )
        created_session: Optional[TranslationSession] = None

        try:
            session = await self.backend.create_session(config, client_info)
            created_session = session
            self._ensure_not_reset(generation)
            self.current_session = session

            # Conversation details are unused until streaming is supported
            await self.backend.start_conversation(session.id)
            self._ensure_not_reset(generation)

            self._state.set(SessionState.ACTIVE)
            logger.info("Session started", session_id=session.id, trip_id=config.trip_id)
            return session

        except Exception as e:
            if created_session is not None:
                try:
                    await self.backend.update_session_status(created_session.id, STATUS_FAILED)
                except Exception as cleanup_error:
                    logger.warning("Failed to mark session as failed",
                                  session_id=created_session.id,
                                  error=str(cleanup_error))

            if generation != self._generation:
                logger.warning("Session start abandoned after reset", trip_id=config.trip_id)
                raise TranslatorError.invalid_state("Session start was interrupted by reset") from e

            self._state.set(SessionState.IDLE)
            self.current_session = None
            logger.error("Session start failed", trip_id=config.trip_id, error=str(e))
            raise TranslatorError.api_error(str(e) or "Failed to start session") from e

        finally:
            # After a reset the guard may belong to a newer start
            if generation == self._generation:
                self._start_in_flight = False

    def _ensure_not_reset(self, generation: int) -> None:
        if generation != self._generation:
            raise TranslatorError.invalid_state("Session start was interrupted by reset")

    async def end_session(self) -> None:
        """End the current session.

        Does nothing while a start is still in flight. Failures are not
        raised; they move the state to ERROR, which stays until
        ``reset_state`` is called.
        """
        session = self.current_session
        if session is None:
            return

        if self._start_in_flight:
            logger.warning("Ignoring end while session start is in flight", session_id=session.id)
            return

        self._state.set(SessionState.ENDING)

        try:
            await self.backend.update_session_status(session.id, STATUS_ENDED)

            self.current_session = None
            self._messages.set(())
            self._state.set(SessionState.IDLE)
            logger.info("Session ended", session_id=session.id)

        except Exception as e:
            message = str(e) or "Failed to end session"
            self._state.set(SessionState.error(message))
            logger.error("Session end failed", session_id=session.id, error=message)

    async def send_message(self, text: str) -> None:
        """Route text to the message transport for the current session."""
        if self.current_session is None:
            raise TranslatorError.invalid_state("No active conversation")

        await self.message_transport.send(self.current_session.id, text)

    def receive_message(self, message: TranslationMessage) -> None:
        """Append a message delivered for the current session."""
        if self.current_session is None:
            logger.warning("Dropping message without active session", message_id=message.id)
            return

        self._messages.set(self._messages.value + (message,))

    def toggle_mute(self) -> None:
        """Toggle microphone mute."""
        if self.current_session is None:
            return

        self._is_muted.set(not self._is_muted.value)
        logger.info("Mute toggled",
                   session_id=self.current_session.id,
                   is_muted=self._is_muted.value)

    def get_session_id(self) -> Optional[str]:
        """Current session ID, or None when there is no session."""
        if self.current_session is None:
            return None
        return self.current_session.id

    def reset_state(self) -> None:
        """Force the controller back to IDLE from any state."""
        self._state.set(SessionState.IDLE)
        self.current_session = None
        self._messages.set(())
        self._start_in_flight = False
        self._generation += 1
        logger.info("Controller state reset")

    async def aclose(self) -> None:
        """Close the backend client."""
        await self.backend.aclose()

    async def __aenter__(self) -> "SessionController":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
