"""Shared pytest fixtures and a fake translator backend."""

import json

import httpx
import pytest
import pytest_asyncio

from zumu_translator.models.session import PlatformContext, SessionConfig
from zumu_translator.services.session_controller import SessionController


class FakeBackend:
    """Records requests and answers them like the translator backend."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.create_response = lambda: httpx.Response(
            200, json={"session_id": "S1", "status": "created", "created_at": "t0"}
        )
        self.conversation_response = lambda: httpx.Response(
            200, json={"conversation_id": "C1", "signed_url": "wss://example/C1", "agent_id": "A1"}
        )
        self.update_response = lambda: httpx.Response(200, json={"ok": True})
        self.on_conversation = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.method == "POST" and request.url.path == "/api/sessions":
            return self.create_response()
        if request.method == "POST" and request.url.path == "/api/conversations/start":
            if self.on_conversation:
                self.on_conversation(request)
            return self.conversation_response()
        if request.method == "PATCH" and request.url.path.startswith("/api/sessions/"):
            return self.update_response()

        return httpx.Response(404, text="Not found")

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]

    def body(self, index: int) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest_asyncio.fixture
async def controller(backend):
    controller = SessionController(
        "test-key",
        "https://translator.test",
        transport=backend.transport(),
    )
    yield controller
    await controller.aclose()


@pytest.fixture
def config():
    return SessionConfig(
        driver_name="John Doe",
        driver_language="English",
        passenger_name="María García",
        trip_id="TRIP-12345",
    )


@pytest.fixture
def platform_context():
    return PlatformContext(platform="Python", device="test-device")
