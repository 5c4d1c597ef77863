"""Root conftest: shared asset tree and in-process client fixtures.

Invariants:
    - Every test gets a fresh asset root under tmp_path
    - GAME_HOST_* env vars are cleared so Settings defaults are deterministic
"""

import gzip

import pytest
from httpx import ASGITransport, AsyncClient

from game_host.config import get_settings
from game_host.main import create_app

INDEX_HTML = b"<!doctype html><title>game</title>"
LARGE_SIZE = 3 * 1024 * 1024 + 17


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("ASSET_ROOT", "BUNDLE_DIR", "PORT", "SERVE_MODE", "HOST"):
        monkeypatch.delenv(f"GAME_HOST_{key}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def asset_root(tmp_path):
    """A small staged game: index, scripts, wasm, compressed bundles, a subdir."""
    root = tmp_path / "minigame"
    (root / "js").mkdir(parents=True)
    (root / "levels").mkdir()
    (root / "index.html").write_bytes(INDEX_HTML)
    (root / "style.css").write_text("body { margin: 0; }")
    (root / "js" / "app.js").write_text("console.log('boot');")
    (root / "js" / "app.js.gz").write_bytes(gzip.compress(b"console.log('gz');"))
    (root / "game.wasm.br").write_bytes(b"\x1b\x03\x00brotli")
    (root / "game.wasm").write_bytes(b"\x00asm\x01\x00\x00\x00")
    (root / "levels" / "index.html").write_bytes(b"<p>levels</p>")
    (root / "levels" / "one.json").write_text('{"level": 1}')
    (root / "LOGO.PNG").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "notes.txt").write_text("plain")
    return root


@pytest.fixture
def large_files(asset_root):
    """Two multi-megabyte files with distinct byte patterns."""
    first = asset_root / "first.data"
    second = asset_root / "second.data"
    first.write_bytes(bytes(i % 251 for i in range(LARGE_SIZE)))
    second.write_bytes(bytes((i * 7 + 3) % 253 for i in range(LARGE_SIZE)))
    return first, second


@pytest.fixture
async def client(asset_root):
    """FastAPI test client over the temporary asset root."""
    app = create_app(asset_root, chunk_size=4096)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
