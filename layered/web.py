"""Application factory that serves the frontend and backend layers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from .backend.routes import register_backend_routes
from .config import Settings, load_settings
from .database import Database
from .frontend.routes import register_frontend_routes

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

logger = logging.getLogger("layered.web")


def _format_datetime(value) -> str:
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d %H:%M:%S %Z")


def create_app(
    *,
    database: Optional[Database] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create the combined ASGI application."""

    if settings is None:
        settings = load_settings()

    if database is None:
        database = Database(settings.database_url)
        database.initialize()

    app = FastAPI(
        title=settings.title,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.database = database
    app.state.settings = settings

    templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
    templates.env.globals["title"] = settings.title
    templates.env.filters["datetime"] = _format_datetime

    register_frontend_routes(app, templates)
    register_backend_routes(app, templates, database)

    logger.debug("Application %s created", settings.title)
    return app


__all__ = ["create_app"]
