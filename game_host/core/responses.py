"""Asset Responses: the tagged variant every request resolves to.

Invariants:
    - AssetResponse is exactly Ok | Forbidden | NotFound | InternalError
    - Only Ok carries CORS headers and a streamed body
    - Error bodies are plain text with fixed prefixes ("Forbidden", "Not Found: ",
      "Internal Server Error: ")

Design Decisions:
    - Frozen dataclasses + one renderer (api/render.py) over a response class hierarchy
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from game_host.core.domain_types import MediaType, RejectionReason
from game_host.core.negotiate_content import ContentType
from game_host.core.resolve_path import Rejection

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


@dataclass(frozen=True)
class Ok:
    """200 with a chunked body."""
    body: Iterator[bytes]
    media_type: MediaType
    headers: dict[str, str] = field(default_factory=dict)
    status_code: int = 200


@dataclass(frozen=True)
class Forbidden:
    """403: the request path contained a traversal token."""
    status_code: int = 403

    @property
    def text(self) -> str:
        return "Forbidden"


@dataclass(frozen=True)
class NotFound:
    """404: the resolved path is missing or a directory."""
    path: str
    status_code: int = 404

    @property
    def text(self) -> str:
        return f"Not Found: {self.path}"


@dataclass(frozen=True)
class InternalError:
    """500: an unexpected failure, reported by exception class name and message."""
    kind: str
    message: str
    status_code: int = 500

    @property
    def text(self) -> str:
        return f"Internal Server Error: {self.kind} - {self.message}"


AssetResponse = Ok | Forbidden | NotFound | InternalError


def ok_response(body: Iterator[bytes], content: ContentType) -> Ok:
    """Build the 200 variant: CORS headers always, Content-Encoding when negotiated."""
    headers = dict(CORS_HEADERS)
    if content.encoding is not None:
        headers["Content-Encoding"] = content.encoding.value
    return Ok(body=body, media_type=content.media_type, headers=headers)


def from_rejection(rejection: Rejection) -> Forbidden | NotFound:
    """Map a resolver rejection to its error variant."""
    if rejection.reason is RejectionReason.FORBIDDEN:
        return Forbidden()
    return NotFound(rejection.attempted_path or "")


def from_exception(exc: BaseException) -> InternalError:
    """500 variant from any exception: class name as kind, str() as message."""
    return InternalError(kind=type(exc).__name__, message=str(exc))
