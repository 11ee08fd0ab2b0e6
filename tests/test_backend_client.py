"""Tests for the translator backend HTTP client."""

import json

import httpx
import pytest

from zumu_translator.errors import ErrorKind, TranslatorError
from zumu_translator.models.api import ClientInfo
from zumu_translator.models.session import SessionConfig
from zumu_translator.services.backend_client import BackendClient


CLIENT_INFO = ClientInfo(platform="Python", sdk_version="1.0.0", device="test-device")


def make_client(handler) -> BackendClient:
    return BackendClient("secret", "https://translator.test/", transport=httpx.MockTransport(handler))


class TestCreateSession:
    """Tests for session creation."""

    @pytest.mark.asyncio
    async def test_optional_fields_sent_when_present(self, backend):
        """Test that optional trip details are included when given."""
        client = BackendClient("secret", "https://translator.test", transport=backend.transport())
        config = SessionConfig(
            driver_name="John Doe",
            driver_language="English",
            passenger_name="María García",
            passenger_language="Spanish",
            trip_id="TRIP-1",
            pickup_location="Airport",
            dropoff_location="Downtown",
        )

        session = await client.create_session(config, CLIENT_INFO)

        body = backend.body(0)
        assert body["passenger_language"] == "Spanish"
        assert body["pickup_location"] == "Airport"
        assert body["dropoff_location"] == "Downtown"
        assert session.id == "S1"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_base_url_trailing_slash(self):
        """Test that a trailing slash in the base URL is tolerated."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json={"session_id": "S9", "status": "created", "created_at": "t"})

        client = make_client(handler)
        config = SessionConfig(driver_name="A", driver_language="en", passenger_name="B", trip_id="T")
        await client.create_session(config, CLIENT_INFO)

        assert seen == ["https://translator.test/api/sessions"]
        assert client.base_url == "https://translator.test"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_missing_response_field(self):
        """Test that a malformed success body is an API error."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "created"})

        client = make_client(handler)
        config = SessionConfig(driver_name="A", driver_language="en", passenger_name="B", trip_id="T")

        with pytest.raises(TranslatorError) as exc_info:
            await client.create_session(config, CLIENT_INFO)

        assert exc_info.value.kind == ErrorKind.API_ERROR
        assert "create session" in exc_info.value.message
        await client.aclose()


class TestErrors:
    """Tests for HTTP and transport failures."""

    @pytest.mark.asyncio
    async def test_http_error_includes_body(self):
        """Test that the response body is captured in the message."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="session not found")

        client = make_client(handler)

        with pytest.raises(TranslatorError) as exc_info:
            await client.update_session_status("S1", "ended")

        assert exc_info.value.kind == ErrorKind.API_ERROR
        assert exc_info.value.message == "Failed to update session (HTTP 404): session not found"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_http_error_without_body(self):
        """Test the placeholder used for empty error bodies."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500)

        client = make_client(handler)

        with pytest.raises(TranslatorError) as exc_info:
            await client.start_conversation("S1")

        assert exc_info.value.message == "Failed to start conversation (HTTP 500): No response body"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self):
        """Test that an expired timeout is a network error."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)

        with pytest.raises(TranslatorError) as exc_info:
            await client.start_conversation("S1")

        assert exc_info.value.kind == ErrorKind.NETWORK_ERROR
        assert "timed out" in exc_info.value.message
        await client.aclose()


class TestUpdateStatus:
    """Tests for status updates."""

    @pytest.mark.asyncio
    async def test_patch_with_empty_response(self):
        """Test that an empty success body is accepted."""
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(204)

        async with make_client(handler) as client:
            await client.update_session_status("S1", "ended")

        assert requests[0].method == "PATCH"
        assert requests[0].url.path == "/api/sessions/S1"
        assert requests[0].headers["Authorization"] == "Bearer secret"
        assert json.loads(requests[0].content) == {"status": "ended"}

    @pytest.mark.asyncio
    async def test_session_id_is_escaped(self):
        """Test that reserved characters in the id stay inside the path segment."""
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(204)

        async with make_client(handler) as client:
            await client.update_session_status("S1/admin?x", "ended")

        assert requests[0].url.raw_path == b"/api/sessions/S1%2Fadmin%3Fx"
        assert requests[0].url.query == b""
