"""
API routes for the Prerender Service.

`GET /render` validates the query string, hands a `RenderRequest` to the shared
`RenderManager` and returns HTML or Markdown. `GET /health` is a liveness probe
that never touches the browser.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from prerender_service.core.config import config_manager
from prerender_service.core.logger import get_logger
from prerender_service.core.manager import RenderManager
from prerender_service.core.models import RenderRequest

logger = get_logger(__name__)

router = APIRouter()

# One manager (and therefore one browser) per process. Built on first use so that
# importing the app does not start anything.
_render_manager: Optional[RenderManager] = None


def get_render_manager() -> RenderManager:
    """FastAPI dependency returning the process-wide `RenderManager`."""
    global _render_manager
    if _render_manager is None:
        _render_manager = RenderManager(config=config_manager)
    return _render_manager


@router.get(
    "/render",
    summary="Render a URL in a headless browser",
    description="Loads the URL in an isolated browsing context, waits for the network to settle "
                "and returns the cleaned HTML, the readability article, or Markdown of either.",
    responses={400: {"description": "Missing or invalid url"}, 500: {"description": "Rendering failed"}},
)
async def render_endpoint(
    url: Optional[str] = Query(None, description="Absolute http(s) URL to render"),
    format: Optional[str] = Query(None, description="'md' or 'markdown' for Markdown output; HTML otherwise"),
    readable: Optional[str] = Query(None, description="'true', '1', 'yes' or 'on' to apply readability extraction"),
    manager: RenderManager = Depends(get_render_manager),
):
    """
    Handles render requests.

    Validation errors raise `InvalidRenderRequestError` before the manager is called;
    pipeline errors propagate to the exception handlers in `api/main.py`.
    """
    render_request = RenderRequest.from_query(url, output_format=format, readable=readable)
    result = await manager.render(render_request)
    return Response(content=result.body, media_type=result.content_type)


@router.get("/health", summary="Liveness probe")
async def health(manager: RenderManager = Depends(get_render_manager)):
    """Always 200; reports the browser state without launching it."""
    return {
        "status": "ok",
        "browser": "running" if manager.supervisor.is_running else "stopped",
    }
