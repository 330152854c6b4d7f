"""
API Routes sub-package for the Prerender Service.

The render router is re-exported here for inclusion in the main FastAPI
application (`api/main.py`).
"""

from .render_routes import router as render_router, get_render_manager

__all__ = [
    "render_router",
    "get_render_manager",
]
