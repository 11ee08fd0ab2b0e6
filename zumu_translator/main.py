"""FastAPI UI bridge entry point."""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zumu_translator import __version__
from zumu_translator.config import Settings, get_settings
from zumu_translator.logging_config import configure_logging
from zumu_translator.routes import websocket, api
from zumu_translator.services.session_controller import SessionController


def create_app(
    settings: Optional[Settings] = None,
    controller: Optional[SessionController] = None,
) -> FastAPI:
    """Build the bridge app around one session controller."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        active_settings = settings
        if controller is None and active_settings is None:
            active_settings = get_settings()
        if active_settings is not None:
            configure_logging(active_settings.log_level)

        log = structlog.get_logger()

        owned = controller is None
        session_controller = controller or SessionController.from_settings(active_settings)
        app.state.controller = session_controller

        log.info("Translator bridge started", base_url=session_controller.backend.base_url)

        yield

        # Cleanup
        log.info("Shutting down translator bridge")
        if session_controller.current_session is not None:
            await session_controller.end_session()
        if owned:
            await session_controller.aclose()
        log.info("Translator bridge shutdown complete")

    app = FastAPI(
        title="Zumu Translator Bridge",
        description="Local bridge exposing translation session state to a UI shell",
        version=__version__,
        lifespan=lifespan,
    )

    # UI shells load from file:// or a dev server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(websocket.router)
    app.include_router(api.router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()
