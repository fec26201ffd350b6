"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from oracle_client.config import AppConfig, PythConfig


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_pyth_config() -> PythConfig:
    return PythConfig(
        base_url="https://hermes.example.com/v2",
        timeout=5.0,
        headers={"x-api-key": "secret"},
    )


@pytest.fixture()
def sample_app_config(sample_pyth_config: PythConfig) -> AppConfig:
    return AppConfig(pyth=sample_pyth_config, feeds={"BTC": 1, "ETH": 255})


SAMPLE_YAML = textwrap.dedent("""\
    pyth:
      base_url: "https://hermes.example.com/v2"
      timeout: 5
      headers:
        x-api-key: "abc"
    feeds:
      BTC: 1
      ETH: "0xff"
      SOL: "4096"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Sample Hermes payloads
# ---------------------------------------------------------------------------


def _make_price(price: str = "350000000", expo: int = -8) -> dict[str, Any]:
    return {"price": price, "conf": "120000", "expo": expo, "publish_time": 1700000000}


def _make_price_update(ids: list[str] | None = None) -> dict[str, Any]:
    ids = ids if ids is not None else ["1"]
    return {
        "binary": {"encoding": "hex", "data": ["504e4155"]},
        "parsed": [
            {
                "id": fid,
                "price": _make_price(),
                "ema_price": _make_price("349000000"),
                "metadata": {"slot": 42, "proof_available_time": 1700000001},
            }
            for fid in ids
        ],
    }


@pytest.fixture()
def sample_update_payload() -> dict[str, Any]:
    return _make_price_update(["1", "ff"])


# ---------------------------------------------------------------------------
# Mock aiohttp session
# ---------------------------------------------------------------------------


def _mock_session(
    status: int = 200, body: str = "{}", error: Exception | None = None
) -> MagicMock:
    """Create a mock aiohttp session whose ``request`` returns ``body``."""
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.text = AsyncMock(return_value=body)
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)

    session = MagicMock()
    if error:
        session.request = MagicMock(side_effect=error)
    else:
        session.request = MagicMock(return_value=mock_response)
    return session


@pytest.fixture()
def make_update():
    return _make_price_update


@pytest.fixture()
def make_session():
    return _mock_session
