"""Command Line: stage, serve and print the entry URL for a bundled game.

Flags override the GAME_HOST_* environment settings.
"""

import argparse
import logging
import threading

from game_host.config import Settings, get_settings
from game_host.core.domain_types import ServeMode
from game_host.infrastructure.observability import setup_logging
from game_host.services.launch import launch

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="game-host",
        description="Serve a staged offline game over loopback HTTP.",
    )
    parser.add_argument("--asset-root", help="writable directory the game is served from")
    parser.add_argument("--bundle", help="bundled asset tree to stage into --asset-root")
    parser.add_argument("--mode", choices=[m.value for m in ServeMode])
    parser.add_argument("--port", type=int, help="fixed port (default: allocate)")
    parser.add_argument("--log-level")
    return parser


def settings_from_args(args: argparse.Namespace, base: Settings) -> Settings:
    overrides = {
        "asset_root": args.asset_root,
        "bundle_dir": args.bundle,
        "serve_mode": args.mode,
        "port": args.port,
        "log_level": args.log_level,
    }
    data = base.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args, get_settings())
    setup_logging(settings.log_level, settings.log_format)

    result = launch(settings)
    print(result.entry_url, flush=True)
    if result.server is None:
        return 0

    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
