"""Response Rendering: AssetResponse variant -> Starlette response.

Invariants:
    - Ok renders as a StreamingResponse without Content-Length (chunked transfer)
    - Every error variant renders as text/plain with its fixed body
"""

from starlette.responses import PlainTextResponse, Response, StreamingResponse

from game_host.core.responses import AssetResponse, Ok


def render_response(response: AssetResponse) -> Response:
    """The single place an AssetResponse becomes wire format."""
    if isinstance(response, Ok):
        return StreamingResponse(
            response.body,
            status_code=response.status_code,
            media_type=response.media_type,
            headers=response.headers,
        )
    return PlainTextResponse(response.text, status_code=response.status_code)
