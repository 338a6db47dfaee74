"""Administration pages served by the backend layer."""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..database import Database
from .user import UserFacadeInterface, create_user_facade

logger = logging.getLogger("layered.web")


def register_backend_routes(
    app: FastAPI,
    templates: Jinja2Templates,
    database: Database,
) -> None:
    """Expose the admin home page on the provided FastAPI application."""

    router = APIRouter(include_in_schema=False)

    def get_user_facade() -> Iterator[UserFacadeInterface]:
        with database.session() as session:
            yield create_user_facade(session)

    @router.get("/admin", response_class=HTMLResponse, name="admin_home")
    async def admin_home(
        request: Request,
        email: Optional[str] = None,
        facade: UserFacadeInterface = Depends(get_user_facade),
    ):
        lookup = (email or "").strip()
        found = None
        if lookup:
            found = facade.find_one_by_email(lookup)
            logger.info("Admin lookup for %s %s", lookup, "matched" if found else "found nothing")

        return templates.TemplateResponse(
            request,
            "backend/home/index.html",
            {"email": lookup, "found": found},
        )

    app.include_router(router)


__all__ = ["register_backend_routes"]
