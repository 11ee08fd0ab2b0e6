"""REST API routes for driving the session controller from a UI shell."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from zumu_translator.config import SDK_VERSION
from zumu_translator.errors import ErrorKind, TranslatorError
from zumu_translator.models.events import SessionStatus
from zumu_translator.models.session import SessionConfig, TranslationSession
from zumu_translator.services.session_controller import SessionController

router = APIRouter(tags=["api"])

ERROR_STATUS_CODES = {
    ErrorKind.INVALID_STATE: 409,
    ErrorKind.API_ERROR: 502,
    ErrorKind.NETWORK_ERROR: 504,
}


class SendMessageRequest(BaseModel):
    """Outbound text from the UI."""
    text: str


def get_controller(request: Request) -> SessionController:
    return request.app.state.controller


def build_status(controller: SessionController) -> SessionStatus:
    """Snapshot the controller's observable state."""
    state = controller.state.value
    return SessionStatus(
        state=state.kind.value,
        error=state.message,
        session_id=controller.get_session_id(),
        is_muted=controller.is_muted.value,
        messages=list(controller.messages.value),
    )


def to_http_exception(error: TranslatorError) -> HTTPException:
    return HTTPException(
        status_code=ERROR_STATUS_CODES.get(error.kind, 500),
        detail={"code": error.kind.value, "message": error.message},
    )


# Session endpoints

@router.get("/session", response_model=SessionStatus)
async def get_session_status(request: Request):
    """Get current session state."""
    return build_status(get_controller(request))


@router.post("/session", response_model=TranslationSession, status_code=201)
async def start_session(config: SessionConfig, request: Request):
    """Start a translation session."""
    try:
        return await get_controller(request).start_session(config)
    except TranslatorError as e:
        raise to_http_exception(e)


@router.delete("/session", response_model=SessionStatus)
async def end_session(request: Request):
    """End the current session. Failures show up as an error state."""
    controller = get_controller(request)
    await controller.end_session()
    return build_status(controller)


@router.post("/session/mute", response_model=SessionStatus)
async def toggle_mute(request: Request):
    """Toggle microphone mute."""
    controller = get_controller(request)
    controller.toggle_mute()
    return build_status(controller)


@router.post("/session/reset", response_model=SessionStatus)
async def reset_state(request: Request):
    """Force the controller back to idle."""
    controller = get_controller(request)
    controller.reset_state()
    return build_status(controller)


@router.post("/session/messages", status_code=202)
async def send_message(body: SendMessageRequest, request: Request):
    """Send text on the current session."""
    controller = get_controller(request)
    try:
        await controller.send_message(body.text)
    except TranslatorError as e:
        raise to_http_exception(e)

    return {"session_id": controller.get_session_id(), "accepted": True}


# Config endpoint (non-sensitive)

@router.get("/config")
async def get_config(request: Request):
    """Get non-sensitive configuration."""
    return {
        "base_url": get_controller(request).backend.base_url,
        "sdk_version": SDK_VERSION,
    }
