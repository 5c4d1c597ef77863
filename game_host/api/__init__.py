"""API Layer: FastAPI route, response rendering and error handlers.

Invariants:
    - Exactly one route module; no framework routes (docs, openapi) are mounted
    - Every response leaves through render_response or the catch-all handler
"""
