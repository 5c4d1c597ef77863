"""Content Negotiation: MIME type and content-encoding from a file name.

Invariants:
    - Pure functions over the file name only; file contents are never sniffed
    - Extension matching is case-insensitive
    - A compressed asset reports the MIME type of its inner name
      (`app.js.gz` -> application/javascript, never application/gzip)
"""

from dataclasses import dataclass

from game_host.core.domain_types import ContentEncoding, MediaType

DEFAULT_MEDIA_TYPE = MediaType("application/octet-stream")

# Ordered: first matching suffix wins.
_MEDIA_TYPES: tuple[tuple[tuple[str, ...], str], ...] = (
    ((".html", ".htm"), "text/html; charset=utf-8"),
    ((".css",), "text/css; charset=utf-8"),
    ((".js",), "application/javascript; charset=utf-8"),
    ((".json",), "application/json; charset=utf-8"),
    ((".wasm",), "application/wasm"),
    ((".data",), "application/octet-stream"),
    ((".png",), "image/png"),
    ((".jpg", ".jpeg"), "image/jpeg"),
    ((".gif",), "image/gif"),
    ((".svg",), "image/svg+xml"),
    ((".mp3",), "audio/mpeg"),
    ((".mp4",), "video/mp4"),
)

_ENCODINGS: dict[str, ContentEncoding] = {
    ".gz": ContentEncoding.GZIP,
    ".br": ContentEncoding.BR,
}


@dataclass(frozen=True)
class ContentType:
    """Negotiated response typing for one file."""
    media_type: MediaType
    encoding: ContentEncoding | None = None


def mime_for(file_name: str) -> MediaType:
    """MIME type for a file name, application/octet-stream when unknown."""
    lowered = file_name.lower()
    for suffixes, media_type in _MEDIA_TYPES:
        if lowered.endswith(suffixes):
            return MediaType(media_type)
    return DEFAULT_MEDIA_TYPE


def encoding_for(file_name: str) -> ContentEncoding | None:
    """Content-Encoding implied by an outer `.gz` / `.br` suffix, else None."""
    lowered = file_name.lower()
    for suffix, encoding in _ENCODINGS.items():
        if lowered.endswith(suffix):
            return encoding
    return None


def strip_encoding_suffix(file_name: str) -> str:
    """Drop the outer compression suffix: `xxx.js.gz` -> `xxx.js`."""
    lowered = file_name.lower()
    for suffix in _ENCODINGS:
        if lowered.endswith(suffix):
            return file_name[: -len(suffix)]
    return file_name


def negotiate(file_name: str) -> ContentType:
    """Media type and optional encoding, resolving the inner name for compressed assets."""
    encoding = encoding_for(file_name)
    if encoding is None:
        return ContentType(mime_for(file_name))
    return ContentType(mime_for(strip_encoding_suffix(file_name)), encoding)
