"""Error Hierarchy: typed, categorized exceptions for every game-host failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request-path problems are NOT exceptions: they are Rejection values (core/resolve_path.py)
    - The 500 body for any error is built by core/responses.from_exception

Design Decisions:
    - Single hierarchy with GameHostError base: callers of LocalServer.start() catch one type
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    NETWORK = "network"
    FILESYSTEM = "filesystem"
    STARTUP = "startup"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    host: str | None = None
    port: int | None = None
    path: str | None = None
    debug_info: dict[str, Any] | None = None


class GameHostError(Exception):
    """Base exception for all game-host errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()


# ─── Network Errors ─────────────────────────────────────────────

class PortBindError(GameHostError):
    """Binding a listening socket failed (port taken, permission, exhaustion)."""
    def __init__(
        self, host: str, port: int, reason: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.host = host
        ctx.port = port
        super().__init__(
            f"Could not bind {host}:{port}: {reason}",
            "PORT_BIND_FAILED", ErrorCategory.NETWORK,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.host = host
        self.port = port


class ServerStartupError(GameHostError):
    """Server loop exited or timed out before reporting it had started."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Server failed to start: {reason}",
            "SERVER_STARTUP_FAILED", ErrorCategory.STARTUP,
            ErrorSeverity.CRITICAL, context,
        )


# ─── Filesystem Errors ──────────────────────────────────────────

class StreamError(GameHostError):
    """Reading a file body failed while streaming it to a client."""
    def __init__(self, path: str, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.path = path
        super().__init__(
            f"Failed reading {path}: {reason}",
            "STREAM_FAILED", ErrorCategory.FILESYSTEM,
            ErrorSeverity.ERROR, ctx,
        )
        self.path = path


class StagingError(GameHostError):
    """The bundled asset tree could not be staged at all."""
    def __init__(self, source: str, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.path = source
        super().__init__(
            f"Cannot stage assets from {source}: {reason}",
            "STAGING_FAILED", ErrorCategory.FILESYSTEM,
            ErrorSeverity.ERROR, ctx,
        )
        self.source = source
