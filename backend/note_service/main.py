"""
Note Service — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance;
       run() serves it with uvicorn on a TCP port or a unix socket.
Who:   uvicorn (`uvicorn note_service.main:app`) or the `note-service` script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  Req ID      │→│ Logging  │→│  CORS           │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │ /api/notes   │ │/api/tags │ │ /health         │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ BadRequest→400 │ NotFound→404 │ Internal→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging → open MongoDB client → build storages and
              services on app.state
    Shutdown: close the MongoDB client
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from note_service import __version__
from note_service.config import Settings, settings
from note_service.database import connect, disconnect
from note_service.middleware.errors import register_exception_handlers
from note_service.middleware.logging import RequestLoggingMiddleware
from note_service.middleware.request_id import RequestIDMiddleware
from note_service.routes import health, notes, tags

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure process-wide logging once, before anything else logs.

    Format: 2024-01-15T12:00:00 [INFO] note_service.routes.notes: CREATE NOTE
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party noise
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

def build_lifespan(app_settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging(app_settings.log_level)
        logger.info("Note service %s starting up...", __version__)

        await connect(app, app_settings)
        logger.info("Application initialized and started")

        yield

        logger.info("Note service shutting down...")
        await disconnect(app)
        logger.info("Shutdown complete.")

    return lifespan


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the module-level singleton.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Note Service API",
        description="CRUD service for notes and tags backed by MongoDB.",
        version=__version__,
        lifespan=build_lifespan(app_settings),
    )

    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(tags.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """
    Serve the app with uvicorn.

    LISTEN_TYPE=port binds BACKEND_HOST:BACKEND_PORT; LISTEN_TYPE=sock binds a
    unix socket at SOCKET_PATH (default ./app.sock). uvicorn handles
    SIGINT/SIGTERM with a graceful shutdown.
    """
    setup_logging(settings.log_level)
    if settings.listen_type == "sock":
        socket_path = settings.socket_path or os.path.join(os.getcwd(), "app.sock")
        logger.info("Socket path: %s", socket_path)
        uvicorn.run(app, uds=socket_path, log_config=None)
    else:
        logger.info("Bind application to host: %s and port: %d", settings.backend_host, settings.backend_port)
        uvicorn.run(app, host=settings.backend_host, port=settings.backend_port, log_config=None)


if __name__ == "__main__":
    run()
