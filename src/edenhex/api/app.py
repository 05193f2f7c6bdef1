"""
FastAPI application factory for the edenhex map API.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from edenhex import __version__
from edenhex.api.sessions import SessionManager
from edenhex.api.routers import game, maps

# Load .env from the project root first, then CWD
_project_root = Path(__file__).resolve().parents[3]  # src/edenhex/api/app.py → project root
load_dotenv(_project_root / ".env")
load_dotenv(Path.cwd() / ".env")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title="Edenhex API",
        description="REST API for procedural hex maps and the games played on them",
        version=__version__,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    max_sessions = os.environ.get("EDENHEX_MAX_SESSIONS")
    application.state.session_manager = SessionManager(
        max_sessions=int(max_sessions) if max_sessions else None,
    )

    application.include_router(maps.router, prefix="/api/maps", tags=["maps"])
    application.include_router(game.router, prefix="/api/game", tags=["game"])

    @application.get("/api/health")
    def health_check():
        return {"status": "ok"}

    return application


app = create_app()
