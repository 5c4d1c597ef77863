"""Local Server: binds the asset app to loopback and runs uvicorn in a daemon thread.

Invariants:
    - Two states only: STOPPED until start() succeeds, then RUNNING for the process lifetime
    - start() returns only after the socket is bound, listening and the server loop
      has reported started; no "still binding" window is visible to the caller
    - start() raises PortBindError when the bind fails; it never returns a dead port
    - current_port() is the explicit handle for the bound port (no global port holder)

Design Decisions:
    - The socket is bound here, synchronously, and handed to uvicorn via `sockets=`:
      bind errors surface in the caller's thread instead of as SystemExit in the
      server thread
    - uvicorn log_config=None: request logging goes through the process root logger
"""

import logging
import socket
import threading
import time
from pathlib import Path

import uvicorn

from game_host.core.domain_types import FALLBACK_PORT, ServerState
from game_host.core.errors import PortBindError, ServerStartupError
from game_host.infrastructure.file_stream import DEFAULT_CHUNK_SIZE
from game_host.infrastructure.port_allocator import allocate_port
from game_host.main import create_app

logger = logging.getLogger(__name__)

_POLL_INTERVAL_SECONDS = 0.01
_LISTEN_BACKLOG = 128


class LocalServer:
    """Static file server for one asset root, started once per process."""

    def __init__(
        self,
        asset_root: Path | str,
        host: str = "127.0.0.1",
        port: int = 0,
        fallback_port: int = FALLBACK_PORT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        startup_timeout: float = 5.0,
    ):
        if not str(asset_root).strip():
            raise ValueError("asset_root must not be empty")
        self.asset_root = Path(asset_root).absolute()
        self.host = host
        self._requested_port = port
        self._fallback_port = fallback_port
        self._startup_timeout = startup_timeout
        self._app = create_app(self.asset_root, chunk_size)

        self._lock = threading.Lock()
        self._state = ServerState.STOPPED
        self._port: int | None = None
        self._socket: socket.socket | None = None
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None

    @classmethod
    def from_settings(cls, settings) -> "LocalServer":
        return cls(
            settings.asset_root,
            host=settings.host,
            port=settings.port,
            fallback_port=settings.fallback_port,
            chunk_size=settings.chunk_size,
            startup_timeout=settings.startup_timeout_seconds,
        )

    @property
    def state(self) -> ServerState:
        return self._state

    @property
    def url(self) -> str | None:
        if self._port is None:
            return None
        return f"http://localhost:{self._port}/"

    def current_port(self) -> int | None:
        """Bound port, or None until start() has succeeded."""
        return self._port

    def start(self) -> int:
        """Bind, start serving, and return the bound port.

        Calling start() on a running server returns the existing port.
        """
        with self._lock:
            if self._state is ServerState.RUNNING:
                return self._port

            port = self._requested_port or allocate_port(self.host, self._fallback_port)
            sock = self._bind(port)
            server = uvicorn.Server(uvicorn.Config(
                app=self._app,
                host=self.host,
                port=port,
                log_config=None,
                access_log=False,
                lifespan="off",
            ))
            thread = threading.Thread(
                target=server.run, kwargs={"sockets": [sock]},
                name=f"game-host-{port}", daemon=True,
            )
            thread.start()
            try:
                self._wait_until_started(server, thread)
            except ServerStartupError:
                sock.close()
                raise

            self._socket = sock
            self._server = server
            self._thread = thread
            self._port = port
            self._state = ServerState.RUNNING
            logger.info(
                f"Serving {self.asset_root} on http://localhost:{port}/",
                extra={"port": port, "asset_root": str(self.asset_root)},
            )
            return port

    def _bind(self, port: int) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.host, port))
            sock.listen(_LISTEN_BACKLOG)
        except OSError as e:
            sock.close()
            logger.error(
                f"Bind {self.host}:{port} failed: {e}",
                extra={"host": self.host, "port": port, "error_kind": type(e).__name__},
            )
            raise PortBindError(self.host, port, str(e)) from e
        return sock

    def _wait_until_started(self, server: uvicorn.Server, thread: threading.Thread) -> None:
        deadline = time.monotonic() + self._startup_timeout
        while not server.started:
            if not thread.is_alive():
                raise ServerStartupError("server thread exited during startup")
            if time.monotonic() > deadline:
                server.should_exit = True
                raise ServerStartupError(
                    f"not started after {self._startup_timeout:.1f}s",
                )
            time.sleep(_POLL_INTERVAL_SECONDS)
