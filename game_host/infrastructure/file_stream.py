"""File Streaming: open an asset and yield it in fixed-size chunks.

Invariants:
    - The handle is closed on every exit path: exhaustion, read error, or the
      iterator being closed/discarded after a client disconnect
    - A read error mid-stream is logged and re-raised as StreamError; the
      response status is already sent, so the connection is simply dropped
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from game_host.core.errors import StreamError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


def open_asset(path: Path) -> BinaryIO:
    """Open an asset for binary reading. OSError propagates to the caller."""
    return open(path, "rb")


def iter_chunks(handle: BinaryIO, path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield the file in chunks, then close it."""
    try:
        while True:
            chunk = handle.read(chunk_size)
            if not chunk:
                break
            yield chunk
    except OSError as e:
        logger.error(
            f"Stream of {path} aborted: {e}",
            extra={"path": str(path), "error_kind": type(e).__name__},
        )
        raise StreamError(str(path), str(e)) from e
    finally:
        handle.close()
