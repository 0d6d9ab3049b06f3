from __future__ import annotations

import json
from typing import Any

import pytest

from openwx.core.config import Settings
from openwx.models.weather import Coordinates, Units
from tests.fakes import ZOCCA_PAYLOAD, FakeTransport, zocca_payload


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        api_key="test-api-key",
        base_url="https://api.example.com",
        units=Units.STANDARD,
        user_agent="test-agent",
        timeout_seconds=1.0,
        default_latitude=44.34,
        default_longitude=10.99,
        log_level="WARNING",
    )


@pytest.fixture()
def zocca() -> dict[str, Any]:
    return zocca_payload()


@pytest.fixture()
def zocca_body() -> str:
    return json.dumps(ZOCCA_PAYLOAD)


@pytest.fixture()
def coordinates() -> Coordinates:
    return Coordinates(latitude=44.34, longitude=10.99)


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()
