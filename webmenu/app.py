"""FastAPI application serving rendered menus."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field, ValidationError

from .config import MenuDefinition
from .errors import MalformedMenuError
from .models import MenuConfig, RequestContext, parse_items
from .widgets import MenuWidget

_LOGGER = logging.getLogger(__name__)


class RenderRequest(BaseModel):
    """Payload of ``POST /render``."""

    items: List[Dict[str, Any]] = Field(default_factory=list)
    options: Dict[str, Any] = Field(default_factory=dict)
    route: str = ""
    params: Dict[str, Any] = Field(default_factory=dict)


class RenderResponse(BaseModel):
    html: str
    has_active: bool


def create_app(definition: Optional[MenuDefinition] = None) -> FastAPI:
    """Build the application; ``definition`` backs the ``/menu`` endpoint."""

    site_menu = definition or MenuDefinition()
    widget = MenuWidget(site_menu.config)
    app = FastAPI(title="Menu Renderer")

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/menu/{route:path}", response_class=HTMLResponse)
    async def get_menu(route: str, request: Request) -> HTMLResponse:
        """Render the site menu for the request's route and query string."""

        context = RequestContext.from_path(route, dict(request.query_params))
        try:
            result = widget.run((site_menu.items, context))
        except MalformedMenuError as exc:
            _LOGGER.error("Configured menu is malformed: %s", exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return HTMLResponse(result.html)

    @app.post("/render", response_model=RenderResponse)
    async def render(payload: RenderRequest) -> RenderResponse:
        try:
            config = MenuConfig.model_validate(payload.options)
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail=exc.errors(include_url=False)) from exc

        context = RequestContext.from_path(payload.route, payload.params)
        try:
            items = parse_items(payload.items, max_depth=config.max_depth)
            result = MenuWidget(config).run((items, context))
        except MalformedMenuError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return RenderResponse(html=result.html, has_active=result.has_active)

    return app


__all__ = ["RenderRequest", "RenderResponse", "create_app"]
