"""Infrastructure Layer: sockets, file streams, the uvicorn server thread and logging.

Invariants:
    - Infrastructure never decides HTTP status codes (services/ and api/ do)
    - Every OS-level failure is mapped to a GameHostError subclass or logged and absorbed
"""
