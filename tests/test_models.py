"""Tests for session models."""

import pytest
from pydantic import ValidationError

from zumu_translator.errors import ErrorKind, TranslatorError
from zumu_translator.models.api import CreateSessionResponse
from zumu_translator.models.session import (
    PlatformContext,
    SessionConfig,
    SessionState,
    StateKind,
    TranslationMessage,
)


class TestSessionConfig:
    """Tests for SessionConfig."""

    def test_required_fields(self):
        """Test that missing required fields are rejected."""
        with pytest.raises(ValidationError):
            SessionConfig(driver_name="John", driver_language="English", passenger_name="Ana")

    def test_empty_driver_name(self):
        """Test that the driver name must not be empty."""
        with pytest.raises(ValidationError):
            SessionConfig(driver_name="", driver_language="English", passenger_name="Ana", trip_id="T1")

    def test_optional_fields_default_to_none(self):
        """Test optional trip details."""
        config = SessionConfig(driver_name="John", driver_language="English", passenger_name="Ana", trip_id="T1")
        assert config.passenger_language is None
        assert config.pickup_location is None
        assert config.dropoff_location is None

    def test_immutable(self):
        """Test that configs cannot be changed after creation."""
        config = SessionConfig(driver_name="John", driver_language="English", passenger_name="Ana", trip_id="T1")
        with pytest.raises(ValidationError):
            config.trip_id = "T2"


class TestSessionState:
    """Tests for SessionState."""

    def test_equality(self):
        """Test that states compare by kind and message."""
        assert SessionState.IDLE == SessionState(StateKind.IDLE)
        assert SessionState.error("x") == SessionState.error("x")
        assert SessionState.error("x") != SessionState.error("y")
        assert SessionState.ACTIVE != SessionState.CONNECTING

    def test_error_carries_message(self):
        """Test the error variant."""
        state = SessionState.error("Failed to update session")
        assert state.is_error
        assert state.message == "Failed to update session"
        assert str(state) == "error(Failed to update session)"

    def test_plain_states_have_no_message(self):
        """Test that non-error states carry no message."""
        assert SessionState.ENDING.message is None
        assert str(SessionState.DISCONNECTED) == "disconnected"


class TestMessagesAndMetadata:
    """Tests for the remaining records."""

    def test_message_defaults(self):
        """Test that messages get an id and timestamp."""
        first = TranslationMessage(role="user", content="Hi")
        second = TranslationMessage(role="user", content="Hi")
        assert first.id != second.id
        assert first.timestamp.tzinfo is not None

    def test_platform_context_detect(self):
        """Test that detection fills both fields."""
        context = PlatformContext.detect()
        assert context.platform == "Python"
        assert context.device

    def test_create_response_to_session(self):
        """Test mapping the server record."""
        response = CreateSessionResponse(session_id="S1", status="created", created_at="t0")
        session = response.to_session()
        assert (session.id, session.status, session.created_at) == ("S1", "created", "t0")


class TestTranslatorError:
    """Tests for TranslatorError."""

    def test_kind_and_message(self):
        """Test the tagged error."""
        error = TranslatorError.invalid_state("Session start already in progress")
        assert error.kind == ErrorKind.INVALID_STATE
        assert str(error) == "Session start already in progress"
