"""Services Layer: per-request asset serving, asset staging and the launch decision.

Invariants:
    - serve_asset.handle never raises; every outcome is an AssetResponse variant
"""
