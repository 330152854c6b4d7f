"""
Main application file for the Prerender Service API.

This file initializes the FastAPI application, sets up logging, registers the
exception handlers that map pipeline errors to HTTP responses, and includes the
render router. The application lifespan closes the shared browser on shutdown;
uvicorn triggers it on SIGINT/SIGTERM.
"""
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from prerender_service.api.routes import render_router, get_render_manager
from prerender_service.core.config import config_manager
from prerender_service.core.exceptions import InvalidRenderRequestError, PrerenderServiceError
from prerender_service.core.logger import setup_logging, get_logger

setup_logging(config_manager)
logger = get_logger(__name__)

DEFAULT_PORT = 3000
GENERIC_ERROR_BODY = {"error": "rendering failed"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    manager = get_render_manager()
    await manager.startup()
    logger.info("Prerender Service started.")
    yield
    logger.info("Prerender Service shutting down.")
    await manager.shutdown()


app = FastAPI(
    title="Prerender Service API",
    description="Renders JavaScript-heavy pages in a headless browser and returns "
                "cleaned HTML, a readability article, or Markdown.",
    version="0.1.0",
    lifespan=lifespan,
)


# --- Exception Handlers ---

@app.exception_handler(InvalidRenderRequestError)
async def invalid_request_exception_handler(request: Request, exc: InvalidRenderRequestError):
    """Client-caused errors: 400 with the validation message."""
    logger.warning(f"Rejected request {request.method} {request.url}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.message},
    )


@app.exception_handler(PrerenderServiceError)
async def pipeline_exception_handler(request: Request, exc: PrerenderServiceError):
    """
    Pipeline errors (launch, navigation, extraction, conversion): 500 with a
    generic body. The detail stays in the server log.
    """
    logger.error(
        f"{exc.__class__.__name__} while handling {request.method} {request.url}: {exc.message}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=GENERIC_ERROR_BODY,
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Any other unhandled exception: 500 with the same generic body."""
    logger.critical(
        f"Unhandled exception {exc.__class__.__name__} while handling {request.method} {request.url}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=GENERIC_ERROR_BODY,
    )


app.include_router(render_router, tags=["Rendering"])


def run() -> None:
    """Starts uvicorn on `server.host` and the port from the PORT environment variable."""
    import uvicorn

    host = config_manager.get("server.host", "0.0.0.0")
    port = int(os.getenv("PORT") or config_manager.get("server.port", DEFAULT_PORT))
    logger.info(f"Prerender API listening on {host}:{port}")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
