"""
API sub-package for the Prerender Service.

This package contains the FastAPI application and its routes. Import
`prerender_service.api.main` for the app instance.
"""

__all__ = []
