"""Error Handlers: last-line exception handlers for the asset app.

Invariants:
    - GameHostError and Exception both render as the plain-text 500 body
      `Internal Server Error: <kind> - <message>`
    - Nothing escapes to the ASGI server as an unhandled exception before headers

Design Decisions:
    - serve_asset.handle already converts failures; these handlers cover anything
      raised outside it (rendering, state lookup)
"""

import logging

from fastapi import FastAPI, Request

from game_host.api.render import render_response
from game_host.core.errors import GameHostError
from game_host.core.responses import from_exception

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_game_host_error_handler(app)
    _register_generic_error_handler(app)


def _register_game_host_error_handler(app: FastAPI) -> None:
    """Register game-host error handler."""

    @app.exception_handler(GameHostError)
    async def game_host_error_handler(request: Request, exc: GameHostError):
        logger.error(
            f"GameHostError: {exc.message}",
            extra={"error_kind": exc.code, "path": request.url.path},
        )
        return render_response(from_exception(exc))


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            extra={"error_kind": type(exc).__name__, "path": request.url.path},
            exc_info=True,
        )
        return render_response(from_exception(exc))
