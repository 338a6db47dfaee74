"""Public pages served by the frontend layer."""

from __future__ import annotations

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates


def register_frontend_routes(app: FastAPI, templates: Jinja2Templates) -> None:
    """Expose the home page and the liveness check."""

    router = APIRouter(include_in_schema=False)

    @router.get("/", response_class=HTMLResponse, name="home")
    async def home(request: Request):
        return templates.TemplateResponse(request, "frontend/home/index.html", {})

    @router.get("/health", response_class=PlainTextResponse, name="health")
    async def health() -> PlainTextResponse:
        return PlainTextResponse("OK")

    app.include_router(router)


__all__ = ["register_frontend_routes"]
