"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ORACLE_CLIENT_CONFIG"
DEFAULT_CONFIG_FILE = "config.yaml"

_U64_MAX = 2**64 - 1

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PythConfig:
    base_url: str = "https://hermes.pyth.network/v2"
    timeout: float = 10.0
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class AppConfig:
    pyth: PythConfig = field(default_factory=PythConfig)
    feeds: dict[str, int] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _parse_feed_id(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid feed id: {value!r}")
    if isinstance(value, int):
        return value
    return int(str(value), 0)


def _build_pyth(raw: dict[str, Any]) -> PythConfig:
    headers = {
        str(k): str(v) for k, v in (raw.get("headers") or {}).items() if v
    }
    return PythConfig(
        base_url=raw.get("base_url", PythConfig.base_url),
        timeout=float(raw.get("timeout", PythConfig.timeout)),
        headers=headers,
    )


def _build_feeds(raw: dict[str, Any]) -> dict[str, int]:
    feeds: dict[str, int] = {}
    for symbol, feed_id in raw.items():
        try:
            feeds[str(symbol)] = _parse_feed_id(feed_id)
        except ValueError as e:
            raise ValueError(f"Feed '{symbol}' has invalid id {feed_id!r}") from e
    return feeds


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate client configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``$ORACLE_CLIENT_CONFIG``,
            then ``config.yaml`` in the working directory. When no path is
            given and neither exists, defaults are used.
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILE)
        if not config_path.exists():
            logger.info("No config file at %s, using defaults", config_path)
            return AppConfig()
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        pyth=_build_pyth(raw.get("pyth") or {}),
        feeds=_build_feeds(raw.get("feeds") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.pyth.base_url:
        raise ValueError("pyth.base_url must not be empty")
    if cfg.pyth.timeout <= 0:
        raise ValueError(f"pyth.timeout must be positive, got {cfg.pyth.timeout}")
    for symbol, feed_id in cfg.feeds.items():
        if not 0 <= feed_id <= _U64_MAX:
            raise ValueError(f"Feed '{symbol}' id out of u64 range: {feed_id}")
