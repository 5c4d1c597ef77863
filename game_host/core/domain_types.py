"""Domain Types: enums and value types shared by the resolver, negotiator and server.

Invariants:
    - All valid states encoded as Enums, no raw string matching
    - ServerState has exactly two members (no shutdown or reload state)
"""

from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

MediaType = NewType("MediaType", str)
Port = NewType("Port", int)

FALLBACK_PORT = Port(8080)


# ─── Enums ───────────────────────────────────────────────────────

class RejectionReason(str, Enum):
    """Why a request path did not resolve to a servable file."""
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


class ContentEncoding(str, Enum):
    """Pre-compressed asset encodings, keyed by the outer file suffix."""
    GZIP = "gzip"
    BR = "br"


class ServerState(str, Enum):
    """Server lifecycle: constructed, then bound and accepting for the process lifetime."""
    STOPPED = "stopped"
    RUNNING = "running"


class ServeMode(str, Enum):
    """How the shell loads the game: over loopback HTTP or straight from disk."""
    HTTP = "http"
    FILE = "file"
