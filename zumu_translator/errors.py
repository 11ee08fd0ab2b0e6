"""SDK error type."""

from enum import Enum


class ErrorKind(str, Enum):
    """Error category."""
    INVALID_STATE = "invalid_state"
    API_ERROR = "api_error"
    NETWORK_ERROR = "network_error"


class TranslatorError(Exception):
    """Raised by the SDK. The kind tells callers what went wrong."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @classmethod
    def invalid_state(cls, message: str) -> "TranslatorError":
        return cls(ErrorKind.INVALID_STATE, message)

    @classmethod
    def api_error(cls, message: str) -> "TranslatorError":
        return cls(ErrorKind.API_ERROR, message)

    @classmethod
    def network_error(cls, message: str) -> "TranslatorError":
        return cls(ErrorKind.NETWORK_ERROR, message)

    def __repr__(self) -> str:
        return f"TranslatorError({self.kind.value}, {self.message!r})"
