"""Error hierarchy tests: codes, categories and context fields."""

from game_host.core.errors import (
    ErrorCategory, ErrorSeverity, GameHostError,
    PortBindError, ServerStartupError, StagingError, StreamError,
)


def test_port_bind_error_carries_address():
    error = PortBindError("127.0.0.1", 8080, "Address already in use")
    assert isinstance(error, GameHostError)
    assert error.code == "PORT_BIND_FAILED"
    assert error.category is ErrorCategory.NETWORK
    assert error.severity is ErrorSeverity.CRITICAL
    assert error.context.port == 8080
    assert error.context.host == "127.0.0.1"
    assert "127.0.0.1:8080" in str(error)


def test_stream_error_records_path():
    error = StreamError("/root/game.wasm", "disk gone")
    assert error.category is ErrorCategory.FILESYSTEM
    assert error.context.path == "/root/game.wasm"


def test_startup_and_staging_codes():
    assert ServerStartupError("timeout").code == "SERVER_STARTUP_FAILED"
    assert StagingError("/bundle", "missing").code == "STAGING_FAILED"


def test_error_context_has_utc_timestamp():
    error = StagingError("/bundle", "missing")
    assert error.context.timestamp.tzinfo is not None
