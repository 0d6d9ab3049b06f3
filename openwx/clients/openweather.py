from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import httpx

from openwx.core.exceptions import InvalidCredential, TransportFailure
from openwx.models.weather import Coordinates, CurrentWeather, Units
from openwx.services.weather import parse_current_weather

if TYPE_CHECKING:
    from openwx.core.config import Settings

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org"
CURRENT_WEATHER_PATH = "/data/2.5/weather"
DEFAULT_USER_AGENT = "openwx/0.1"
REDACTED = "REDACTED"


@dataclass(frozen=True)
class WeatherRequest:
    url: str
    params: tuple[tuple[str, str], ...]

    def query(self) -> dict[str, str]:
        return dict(self.params)

    def redacted_url(self) -> str:
        params = self.query()
        if "appid" in params:
            params["appid"] = REDACTED
        return str(httpx.URL(self.url, params=params))


def build_current_weather_request(
    coordinates: Coordinates,
    api_key: str,
    *,
    units: Units | None = None,
    base_url: str = OPENWEATHER_BASE_URL,
) -> WeatherRequest:
    if not isinstance(api_key, str) or not api_key.strip():
        raise InvalidCredential()

    # repr() gives the shortest string that round-trips to the same float.
    params = {
        "lat": repr(float(coordinates.latitude)),
        "lon": repr(float(coordinates.longitude)),
        "mode": "json",
        "appid": api_key,
    }
    if units is not None:
        params["units"] = Units(units).value
    return WeatherRequest(
        url=base_url.rstrip("/") + CURRENT_WEATHER_PATH, params=tuple(params.items())
    )


class WeatherTransport(Protocol):
    def send(self, request: WeatherRequest) -> str: ...


class HttpxTransport:
    def __init__(
        self,
        *,
        timeout_seconds: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client or httpx.Client(
            timeout=timeout_seconds,
            headers={
                "User-Agent": user_agent,
                "Accept": "application/json",
            },
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def send(self, request: WeatherRequest) -> str:
        target = request.redacted_url()
        logger.debug("GET %s", target)
        try:
            resp = self._client.get(request.url, params=request.query())
        except httpx.HTTPError as e:
            raise TransportFailure(f"{type(e).__name__} while requesting {target}") from e

        logger.debug("GET %s -> %s", target, resp.status_code)
        # Error statuses with a JSON body carry the provider's {cod, message} envelope.
        if resp.is_error and "json" not in resp.headers.get("content-type", ""):
            raise TransportFailure(
                f"HTTP {resp.status_code} {resp.reason_phrase} from {target}",
                status_code=resp.status_code,
            )
        return resp.text


class OpenWeatherClient:
    def __init__(
        self,
        *,
        api_key: str,
        transport: WeatherTransport | None = None,
        units: Units | None = None,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout_seconds: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._api_key = api_key
        self._units = units
        self._base_url = base_url
        self._owns_transport = transport is None
        self._transport: WeatherTransport = transport or HttpxTransport(
            timeout_seconds=timeout_seconds, user_agent=user_agent
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, *, transport: WeatherTransport | None = None
    ) -> OpenWeatherClient:
        return cls(
            api_key=settings.api_key,
            transport=transport,
            units=settings.units,
            base_url=settings.base_url_str,
            timeout_seconds=settings.timeout_seconds,
            user_agent=settings.user_agent,
        )

    def close(self) -> None:
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            self._transport.close()

    def __enter__(self) -> OpenWeatherClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def current_weather(self, coordinates: Coordinates) -> CurrentWeather:
        request = build_current_weather_request(
            coordinates, self._api_key, units=self._units, base_url=self._base_url
        )
        body = self._transport.send(request)
        return parse_current_weather(body)


def fetch_current_weather(
    coordinates: Coordinates,
    api_key: str,
    *,
    transport: WeatherTransport | None = None,
    units: Units | None = None,
) -> CurrentWeather:
    with OpenWeatherClient(api_key=api_key, transport=transport, units=units) as client:
        return client.current_weather(coordinates)
