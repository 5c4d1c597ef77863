"""Core Layer: pure request-path and content-type logic, no sockets, no async.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Filesystem access is limited to existence/type checks in resolve_path
"""
