"""Path Resolution: maps an untrusted request path to a file inside the asset root.

Invariants:
    - The `..` check runs on the normalized string BEFORE any filesystem access
    - A ResolvedFile always names an existing regular file under the asset root
    - Never raises for a bad path: the outcome is a ResolvedFile or a Rejection

Design Decisions:
    - Textual `..` rejection over canonicalization: any path containing the token is
      refused, including names like `a..b.js`. Symlinks inside the asset root are
      followed and not checked for escape (documented limitation)
    - Result values over exceptions: rejection is an expected outcome of untrusted
      input, not a fault
"""

from dataclasses import dataclass
from pathlib import Path

from game_host.core.domain_types import RejectionReason

INDEX_FILE = "index.html"
TRAVERSAL_TOKEN = ".."


@dataclass(frozen=True)
class ResolvedFile:
    """An existing regular file under the asset root, resolved for one request."""
    path: Path

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class Rejection:
    """A request path that cannot be served.

    attempted_path is the absolute candidate for NOT_FOUND, None for FORBIDDEN
    (a forbidden path is never joined onto the root).
    """
    reason: RejectionReason
    attempted_path: str | None = None


def normalize_request_path(request_path: str | None) -> str:
    """Apply the textual steps: default root, strip query, directory index, slashes.

    Returns the normalized path, still carrying its leading `/`.
    """
    path = request_path or "/"

    query_start = path.find("?")
    if query_start >= 0:
        path = path[:query_start]

    if path == "/" or path.endswith("/"):
        path = path + INDEX_FILE

    return path.replace("\\", "/")


def is_traversal(normalized_path: str) -> bool:
    """True when the path contains the parent-directory token anywhere."""
    return TRAVERSAL_TOKEN in normalized_path


def resolve(request_path: str | None, asset_root: Path | str) -> ResolvedFile | Rejection:
    """Resolve a request path against the asset root.

    Steps: normalize, reject `..`, strip one leading `/`, join, then require an
    existing non-directory. A missing asset root simply makes every candidate
    missing, so every request resolves to NOT_FOUND.
    """
    normalized = normalize_request_path(request_path)
    if is_traversal(normalized):
        return Rejection(RejectionReason.FORBIDDEN)

    relative = normalized[1:] if normalized.startswith("/") else normalized
    # Empty segments dropped: "//etc/x" must stay under the root, not become absolute.
    candidate = Path(asset_root).joinpath(*(seg for seg in relative.split("/") if seg))

    try:
        servable = candidate.exists() and not candidate.is_dir()
    except OSError:
        # ENAMETOOLONG, EACCES and the like: unreachable counts as missing
        servable = False
    if not servable:
        return Rejection(RejectionReason.NOT_FOUND, str(candidate.absolute()))

    return ResolvedFile(candidate)
