"""Game Host App: FastAPI application factory for one asset root.

Invariants:
    - Routes registered explicitly (a single catch-all asset route)
    - No docs/redoc/openapi routes: every URL path belongs to the asset tree
    - asset_root is fixed at construction and stored read-only on app.state

Design Decisions:
    - Factory over module-level app: each LocalServer owns the app for its root,
      and tests build apps over temporary directories
"""

import logging
from pathlib import Path

from fastapi import FastAPI

from game_host.api.error_handlers import register_error_handlers
from game_host.api.routes import assets
from game_host.infrastructure.file_stream import DEFAULT_CHUNK_SIZE

logger = logging.getLogger(__name__)


def create_app(asset_root: Path | str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> FastAPI:
    """Build the asset app serving `asset_root`."""
    if not str(asset_root).strip():
        raise ValueError("asset_root must not be empty")

    app = FastAPI(
        title="Game Host",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.asset_root = Path(asset_root).absolute()
    app.state.chunk_size = chunk_size

    app.include_router(assets.router)
    register_error_handlers(app)

    logger.debug(
        f"Asset app created for {app.state.asset_root}",
        extra={"asset_root": str(app.state.asset_root)},
    )
    return app
