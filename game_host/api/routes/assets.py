"""Asset Route: one catch-all endpoint serving the static asset tree.

Invariants:
    - GET, POST and OPTIONS are all served the same way (CORS preflight tolerated)
    - The decoded ASGI path is handed to serve_asset untouched; query and body ignored
    - asset_root and chunk_size are read from app.state, never from module globals

Design Decisions:
    - Sync endpoint: FastAPI runs it in the threadpool, so resolution stat() calls
      never block the event loop
"""

from fastapi import APIRouter, Request

from game_host.api.render import render_response
from game_host.services.serve_asset import handle

router = APIRouter(tags=["assets"])

SERVED_METHODS = ["GET", "POST", "OPTIONS"]


@router.api_route("/{asset_path:path}", methods=SERVED_METHODS, include_in_schema=False)
def serve_asset(request: Request, asset_path: str):
    """Serve one file from the asset root."""
    state = request.app.state
    return render_response(
        handle(request.scope["path"], state.asset_root, state.chunk_size),
    )
