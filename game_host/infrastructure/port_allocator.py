"""Port Allocator: ephemeral loopback port discovery with a fixed fallback.

Invariants:
    - Never returns a port <= 0
    - Never raises: any probe failure yields the fallback port
    - The probe socket is always closed before returning

Design Decisions:
    - Bind to port 0 and read back the OS choice over scanning a range
    - The port is free when the probe closes but is not reserved: another process
      could claim it before LocalServer binds. Accepted for a single app on a
      single device; LocalServer.start() reports that case as PortBindError
"""

import logging
import socket

from game_host.core.domain_types import FALLBACK_PORT, Port

logger = logging.getLogger(__name__)


def allocate_port(host: str = "127.0.0.1", fallback: int = FALLBACK_PORT) -> Port:
    """Return an unused TCP port on `host`, or `fallback` if probing fails."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
            probe.bind((host, 0))
            port = probe.getsockname()[1]
    except OSError as e:
        logger.warning(
            f"Port probe on {host} failed, using fallback {fallback}: {e}",
            extra={"host": host, "port": fallback},
        )
        return Port(fallback)

    if port <= 0:
        logger.warning(
            f"Port probe on {host} returned {port}, using fallback {fallback}",
            extra={"host": host, "port": fallback},
        )
        return Port(fallback)
    return Port(port)
