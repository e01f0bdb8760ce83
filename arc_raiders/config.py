"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local secrets and env overrides (gitignored)
  4. Environment variables        — ``ARC_RAIDERS_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The CLI and ``ArcRaidersClient.from_config()`` receive an ``AppConfig``
instance — never raw dicts or individual env var lookups scattered through
the codebase.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

VALID_ENGINES = frozenset({"chromium", "firefox", "webkit"})

# ── Sub-config models ─────────────────────────────────────────────────────────


class ApiConfig(BaseModel):
    """MetaForge API endpoint and request settings."""

    model_config = ConfigDict(frozen=True)

    base_url: str = "https://metaforge.app/api/arc-raiders"
    map_url: str = "https://metaforge.app/api/game-map-data"
    api_key: Optional[str] = None
    timeout_seconds: float = 10.0
    page_size: int = 50

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"page_size must be >= 1, got {v}.")
        return v

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {v}.")
        return v


class CacheConfig(BaseModel):
    """In-memory response cache settings."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    ttl_seconds: float = 300.0

    @field_validator("ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {v}.")
        return v


class BrowserConfig(BaseModel):
    """Headless-browser transport settings (used when direct HTTP is blocked)."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    engine: str = "chromium"
    headless: bool = True
    settle_ms: int = 1000
    user_agent: str = DEFAULT_USER_AGENT

    @field_validator("engine")
    @classmethod
    def validate_engine(cls, v: str) -> str:
        if v not in VALID_ENGINES:
            raise ValueError(
                f"Browser engine must be one of {sorted(VALID_ENGINES)}, got '{v}'."
            )
        return v

    @field_validator("settle_ms")
    @classmethod
    def validate_settle(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"settle_ms must be >= 0, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "WARNING"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    api: ApiConfig = ApiConfig()
    cache: CacheConfig = CacheConfig()
    browser: BrowserConfig = BrowserConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``; if that default file is
            missing (e.g. a wheel install) the built-in defaults are used.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is None:
        config_path = root / "config" / "default.toml"
        if config_path.exists():
            raw = _read_toml(config_path)
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        raw = _read_toml(config_path)

    # Also merge local.toml if present (gitignored local overrides)
    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        raw = _deep_merge(raw, _read_toml(local_config_path))

    # 3. Apply ARC_RAIDERS_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _as_bool(value: str) -> bool:
    return value.lower() in ("1", "true", "yes")


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply ARC_RAIDERS_* env vars to the raw config dict.

    Supported overrides:
      ARC_RAIDERS_API_KEY            → raw["api"]["api_key"]
      ARC_RAIDERS_BASE_URL           → raw["api"]["base_url"]
      ARC_RAIDERS_CACHE_TTL_SECONDS  → raw["cache"]["ttl_seconds"]
      ARC_RAIDERS_CACHE_ENABLED      → raw["cache"]["enabled"]
      ARC_RAIDERS_USE_BROWSER        → raw["browser"]["enabled"]
      ARC_RAIDERS_LOG_LEVEL          → raw["logging"]["level"]
      ARC_RAIDERS_DEBUG              → raw["debug"]
    """
    if api_key := os.environ.get("ARC_RAIDERS_API_KEY"):
        raw.setdefault("api", {})["api_key"] = api_key

    if base_url := os.environ.get("ARC_RAIDERS_BASE_URL"):
        raw.setdefault("api", {})["base_url"] = base_url

    if ttl := os.environ.get("ARC_RAIDERS_CACHE_TTL_SECONDS"):
        raw.setdefault("cache", {})["ttl_seconds"] = float(ttl)

    if cache_enabled := os.environ.get("ARC_RAIDERS_CACHE_ENABLED"):
        raw.setdefault("cache", {})["enabled"] = _as_bool(cache_enabled)

    if use_browser := os.environ.get("ARC_RAIDERS_USE_BROWSER"):
        raw.setdefault("browser", {})["enabled"] = _as_bool(use_browser)

    if log_level := os.environ.get("ARC_RAIDERS_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("ARC_RAIDERS_DEBUG"):
        raw["debug"] = _as_bool(debug)

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        api=ApiConfig(**raw.get("api", {})),
        cache=CacheConfig(**raw.get("cache", {})),
        browser=BrowserConfig(**raw.get("browser", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", False),
    )
