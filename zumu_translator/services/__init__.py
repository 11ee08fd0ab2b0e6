"""SDK services."""

from zumu_translator.services.backend_client import BackendClient
from zumu_translator.services.message_transport import (
    MessageTransport,
    OutboundMessage,
    OutboundMessageQueue,
)
from zumu_translator.services.session_controller import SessionController

__all__ = [
    "BackendClient",
    "MessageTransport",
    "OutboundMessage",
    "OutboundMessageQueue",
    "SessionController",
]
