from __future__ import annotations

import json
from typing import Any

from openwx.clients.openweather import WeatherRequest
from openwx.core.exceptions import TransportFailure

ZOCCA_PAYLOAD: dict[str, Any] = {
    "coord": {"lon": 10.99, "lat": 44.34},
    "weather": [
        {"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04n"}
    ],
    "base": "stations",
    "main": {
        "temp": 281.29,
        "feels_like": 279.63,
        "temp_min": 279.38,
        "temp_max": 281.29,
        "pressure": 1024,
        "humidity": 95,
        "sea_level": 1024,
        "grnd_level": 956,
    },
    "visibility": 10000,
    "wind": {"speed": 2.69, "deg": 202, "gust": 3.51},
    "clouds": {"all": 78},
    "dt": 1763077522,
    "sys": {
        "type": 2,
        "id": 2004688,
        "country": "IT",
        "sunrise": 1763100641,
        "sunset": 1763135429,
    },
    "timezone": 3600,
    "id": 3163858,
    "name": "Zocca",
    "cod": 200,
}


def zocca_payload(**overrides: Any) -> dict[str, Any]:
    payload = json.loads(json.dumps(ZOCCA_PAYLOAD))
    payload.update(overrides)
    return payload


class FakeTransport:
    def __init__(self, body: str | None = None, *, error: Exception | None = None) -> None:
        self._body = body if body is not None else json.dumps(ZOCCA_PAYLOAD)
        self._error = error
        self.requests: list[WeatherRequest] = []

    def send(self, request: WeatherRequest) -> str:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return self._body


class TimeoutTransport(FakeTransport):
    def __init__(self) -> None:
        super().__init__(error=TransportFailure("ReadTimeout while requesting"))
