"""Local server tests: real loopback sockets against a started LocalServer.

Tests cover:
    - start() returns a bound port that accepts connections immediately
    - STOPPED -> RUNNING, and a second start() keeps the same port
    - Bind failure raises PortBindError and leaves the server STOPPED
    - Chunked 200 responses, traversal 403, missing 404 over the wire
    - Concurrent large downloads stay independent
    - A stalled client does not block another client
"""

import concurrent.futures
import socket

import httpx
import pytest

from game_host.config import Settings
from game_host.core.domain_types import ServerState
from game_host.core.errors import PortBindError
from game_host.infrastructure.local_server import LocalServer


@pytest.fixture
def server(asset_root):
    srv = LocalServer(asset_root, chunk_size=16 * 1024)
    srv.start()
    return srv


def test_new_server_is_stopped(asset_root):
    srv = LocalServer(asset_root)
    assert srv.state is ServerState.STOPPED


def test_empty_asset_root_rejected():
    with pytest.raises(ValueError):
        LocalServer("")


def test_start_returns_port_ready_for_connections(asset_root):
    srv = LocalServer(asset_root)
    port = srv.start()

    assert port > 0
    assert srv.state is ServerState.RUNNING
    assert srv.current_port() == port
    with socket.create_connection(("127.0.0.1", port), timeout=2):
        pass


def test_second_start_keeps_port(server):
    port = server.current_port()
    assert server.start() == port


def test_bind_failure_raises_port_bind_error(asset_root):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as blocker:
        blocker.bind(("127.0.0.1", 0))
        blocker.listen(1)
        taken = blocker.getsockname()[1]

        srv = LocalServer(asset_root, port=taken)
        with pytest.raises(PortBindError) as exc_info:
            srv.start()

    assert exc_info.value.port == taken
    assert srv.state is ServerState.STOPPED
    assert srv.current_port() is None


def test_from_settings(asset_root):
    settings = Settings(asset_root=asset_root, fallback_port=9000, chunk_size=1024)
    srv = LocalServer.from_settings(settings)
    assert srv.asset_root == asset_root
    assert srv.state is ServerState.STOPPED


def test_port_and_url_are_none_before_start(asset_root):
    srv = LocalServer(asset_root, port=9000)
    assert srv.current_port() is None
    assert srv.url is None


def test_serves_index_over_http(server):
    res = httpx.get(server.url, timeout=5)
    assert res.status_code == 200
    assert res.text.startswith("<!doctype html>")
    assert res.headers["content-type"] == "text/html; charset=utf-8"
    assert res.headers["access-control-allow-origin"] == "*"
    assert res.headers.get("transfer-encoding") == "chunked"
    assert "content-length" not in res.headers


def test_traversal_over_the_wire_is_forbidden(server):
    res = httpx.get(f"{server.url}%2E%2E/%2E%2E/etc/passwd", timeout=5)
    assert res.status_code == 403
    assert res.text == "Forbidden"


def test_missing_over_the_wire_is_not_found(server, asset_root):
    res = httpx.get(f"{server.url}missing.js", timeout=5)
    assert res.status_code == 404
    assert res.text == f"Not Found: {asset_root / 'missing.js'}"


def test_concurrent_large_downloads_are_independent(server, large_files):
    first, second = large_files

    def fetch(name):
        with httpx.Client(timeout=30) as c:
            return c.get(f"{server.url}{name}").content

    with concurrent.futures.ThreadPoolExecutor(max_workers=4) as pool:
        futures = {
            pool.submit(fetch, path.name): path
            for path in (first, second, first, second)
        }
        for future in concurrent.futures.as_completed(futures):
            assert future.result() == futures[future].read_bytes()


def test_stalled_client_does_not_block_others(server, large_files):
    first, _ = large_files
    with httpx.Client(timeout=10) as slow:
        with slow.stream("GET", f"{server.url}{first.name}") as stalled:
            assert stalled.status_code == 200
            next(stalled.iter_raw())
            # stalled holds the connection open without reading further
            res = httpx.get(f"{server.url}js/app.js", timeout=5)
            assert res.status_code == 200
            assert res.text == "console.log('boot');"
