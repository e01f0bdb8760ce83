"""Tests for arc_raiders.config — TOML loading, local overrides and env vars."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from arc_raiders.config import (
    ApiConfig,
    AppConfig,
    BrowserConfig,
    CacheConfig,
    LoggingConfig,
    load_config,
)

_ENV_VARS = (
    "ARC_RAIDERS_API_KEY",
    "ARC_RAIDERS_BASE_URL",
    "ARC_RAIDERS_CACHE_TTL_SECONDS",
    "ARC_RAIDERS_CACHE_ENABLED",
    "ARC_RAIDERS_USE_BROWSER",
    "ARC_RAIDERS_LOG_LEVEL",
    "ARC_RAIDERS_DEBUG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


# ── load_config ───────────────────────────────────────────────────────────────


def test_default_config_file_loads() -> None:
    config = load_config()
    assert config.api.base_url == "https://metaforge.app/api/arc-raiders"
    assert config.api.page_size == 50
    assert config.cache.ttl_seconds == 300
    assert config.browser.enabled is False


def test_explicit_file_overrides_defaults(tmp_path: Path) -> None:
    path = _write(tmp_path / "custom.toml", "[api]\npage_size = 10\n\n[cache]\nenabled = false\n")
    config = load_config(path)
    assert config.api.page_size == 10
    assert config.cache.enabled is False
    assert config.api.timeout_seconds == 10.0


def test_missing_explicit_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_config(tmp_path / "nope.toml")


def test_local_toml_is_deep_merged(tmp_path: Path) -> None:
    path = _write(tmp_path / "default.toml", '[api]\npage_size = 10\nbase_url = "https://a.test"\n')
    _write(tmp_path / "local.toml", "[api]\npage_size = 25\n")
    config = load_config(path)
    assert config.api.page_size == 25
    assert config.api.base_url == "https://a.test"


def test_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write(tmp_path / "c.toml", "")
    monkeypatch.setenv("ARC_RAIDERS_API_KEY", "k-123")
    monkeypatch.setenv("ARC_RAIDERS_BASE_URL", "https://proxy.test/arc")
    monkeypatch.setenv("ARC_RAIDERS_CACHE_TTL_SECONDS", "60")
    monkeypatch.setenv("ARC_RAIDERS_CACHE_ENABLED", "no")
    monkeypatch.setenv("ARC_RAIDERS_USE_BROWSER", "true")
    monkeypatch.setenv("ARC_RAIDERS_LOG_LEVEL", "debug")
    monkeypatch.setenv("ARC_RAIDERS_DEBUG", "1")

    config = load_config(path)

    assert config.api.api_key == "k-123"
    assert config.api.base_url == "https://proxy.test/arc"
    assert config.cache.ttl_seconds == 60.0
    assert config.cache.enabled is False
    assert config.browser.enabled is True
    assert config.logging.level == "DEBUG"
    assert config.debug is True


# ── Validation ────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "factory",
    [
        lambda: ApiConfig(page_size=0),
        lambda: ApiConfig(timeout_seconds=0),
        lambda: CacheConfig(ttl_seconds=-1),
        lambda: BrowserConfig(engine="netscape"),
        lambda: BrowserConfig(settle_ms=-5),
        lambda: LoggingConfig(level="LOUD"),
    ],
)
def test_invalid_values_rejected(factory) -> None:
    with pytest.raises(ValidationError):
        factory()


def test_invalid_toml_value_rejected(tmp_path: Path) -> None:
    path = _write(tmp_path / "bad.toml", "[cache]\nttl_seconds = 0\n")
    with pytest.raises(ValidationError):
        load_config(path)


def test_config_is_frozen() -> None:
    config = AppConfig()
    with pytest.raises(ValidationError):
        config.debug = True
