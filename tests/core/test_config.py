"""Settings tests: defaults, env overrides, asset root validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from game_host.config import Settings, get_settings
from game_host.core.domain_types import ServeMode


def test_defaults():
    settings = Settings()
    assert settings.host == "127.0.0.1"
    assert settings.port == 0
    assert settings.fallback_port == 8080
    assert settings.serve_mode is ServeMode.HTTP
    assert settings.asset_root.is_absolute()
    assert settings.bundle_dir is None


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("GAME_HOST_ASSET_ROOT", str(tmp_path / "root"))
    monkeypatch.setenv("GAME_HOST_SERVE_MODE", "file")
    monkeypatch.setenv("GAME_HOST_PORT", "8123")

    settings = Settings()

    assert settings.asset_root == tmp_path / "root"
    assert settings.serve_mode is ServeMode.FILE
    assert settings.port == 8123


def test_relative_root_made_absolute():
    settings = Settings(asset_root="staged/minigame")
    assert settings.asset_root == Path("staged/minigame").absolute()


@pytest.mark.parametrize("root", ["", "   "])
def test_empty_asset_root_rejected(root):
    with pytest.raises(ValidationError):
        Settings(asset_root=root)


def test_port_out_of_range_rejected():
    with pytest.raises(ValidationError):
        Settings(port=70000)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
