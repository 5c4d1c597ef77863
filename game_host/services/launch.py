"""Launch: stage the bundle, start the server, and pick the URL the browser view loads.

Invariants:
    - The server is started only after staging has finished
    - A failed start (PortBindError, ServerStartupError) falls back to the staged
      index.html over file://; it is not re-raised
    - When staging fails the server is not started and the file:// URL points at
      the bundle itself
    - The returned LaunchResult holds the running LocalServer (or None), never a global
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from game_host.core.domain_types import ServeMode
from game_host.core.errors import GameHostError
from game_host.core.resolve_path import INDEX_FILE
from game_host.infrastructure.local_server import LocalServer
from game_host.services.stage_assets import StagingResult, stage_assets

logger = logging.getLogger(__name__)


@dataclass
class LaunchResult:
    """Where the browser view should navigate, and how it got there."""
    entry_url: str
    mode: ServeMode
    server: LocalServer | None = None
    staging: StagingResult | None = None


def file_entry_url(root: Path) -> str:
    return (Path(root).absolute() / INDEX_FILE).as_uri()


def launch(settings) -> LaunchResult:
    """Run the shell start-up sequence for `settings`."""
    staging = None
    if settings.bundle_dir is not None:
        staging = stage_assets(settings.bundle_dir, settings.asset_root)
        if not staging.ok:
            return LaunchResult(
                file_entry_url(settings.bundle_dir), ServeMode.FILE, staging=staging,
            )

    file_root = settings.asset_root
    if settings.serve_mode is ServeMode.FILE:
        return LaunchResult(file_entry_url(file_root), ServeMode.FILE, staging=staging)

    server = LocalServer.from_settings(settings)
    try:
        port = server.start()
    except GameHostError as e:
        logger.warning(
            f"Local server unavailable, loading from disk: {e.message}",
            extra={"error_kind": e.code},
        )
        return LaunchResult(file_entry_url(file_root), ServeMode.FILE, staging=staging)

    return LaunchResult(
        f"http://localhost:{port}/{INDEX_FILE}", ServeMode.HTTP, server, staging,
    )
