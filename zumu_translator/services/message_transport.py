"""Outbound message routing for live sessions."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol

import structlog

logger = structlog.get_logger()


@dataclass(frozen=True)
class OutboundMessage:
    """Text queued for delivery on a session."""
    session_id: str
    text: str
    queued_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class MessageTransport(Protocol):
    """Delivers text typed by the user to the translation backend."""

    async def send(self, session_id: str, text: str) -> None:
        ...


class OutboundMessageQueue:
    """Holds outbound text until a streaming transport drains it."""

    def __init__(self, max_size: int = 100):
        self._pending: deque[OutboundMessage] = deque(maxlen=max_size)

    async def send(self, session_id: str, text: str) -> None:
        if len(self._pending) == self._pending.maxlen:
            logger.warning("Outbound queue full, dropping oldest message",
                          session_id=session_id)
        self._pending.append(OutboundMessage(session_id=session_id, text=text))
        logger.debug("Message queued", session_id=session_id, length=len(text))

    def drain(self) -> list[OutboundMessage]:
        """Remove and return all pending messages in send order."""
        messages = list(self._pending)
        self._pending.clear()
        return messages

    def __len__(self) -> int:
        return len(self._pending)
