"""Serve Asset: the per-request pipeline from raw path to AssetResponse.

Invariants:
    - handle() never raises; unexpected failures become InternalError (500)
    - Traversal paths are answered 403 without touching the filesystem
    - The file is opened before the 200 is built, so open failures are still a 500;
      once opened, the handle belongs to the Ok body iterator
    - No state is shared between calls beyond the read-only asset root

Design Decisions:
    - Pure core (resolve, negotiate) + thin IO shell here (open, chunk)
    - Catch-all at this boundary: a client must always get a diagnosable response
"""

import logging
from pathlib import Path

from game_host.core.negotiate_content import negotiate
from game_host.core.resolve_path import Rejection, resolve
from game_host.core.responses import (
    AssetResponse, from_exception, from_rejection, ok_response,
)
from game_host.infrastructure.file_stream import (
    DEFAULT_CHUNK_SIZE, iter_chunks, open_asset,
)

logger = logging.getLogger(__name__)


def handle(
    raw_path: str | None, asset_root: Path, chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> AssetResponse:
    """Resolve, negotiate and open one request path."""
    try:
        resolved = resolve(raw_path, asset_root)
        if isinstance(resolved, Rejection):
            response = from_rejection(resolved)
            logger.info(
                f"{response.status_code} {raw_path}",
                extra={"path": raw_path, "status": response.status_code},
            )
            return response

        content = negotiate(resolved.name)
        stream = open_asset(resolved.path)
        try:
            response = ok_response(iter_chunks(stream, resolved.path, chunk_size), content)
        except BaseException:
            stream.close()
            raise
        logger.debug(
            f"200 {raw_path} -> {resolved.path}",
            extra={"path": raw_path, "status": 200},
        )
        return response
    except Exception as e:
        logger.error(
            f"Unexpected failure serving {raw_path}: {e}",
            extra={"path": raw_path, "status": 500, "error_kind": type(e).__name__},
            exc_info=True,
        )
        return from_exception(e)
