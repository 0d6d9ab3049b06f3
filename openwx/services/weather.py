from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import ValidationError

from openwx.core.exceptions import MalformedResponse, ProviderError, TimestampOutOfRange
from openwx.models.weather import (
    Clouds,
    Coordinates,
    CurrentWeather,
    MainMeasurements,
    Precipitation,
    SystemInfo,
    WeatherCondition,
    Wind,
)
from openwx.schemas.openweather import (
    CurrentWeatherPayload,
    PrecipitationPayload,
    ProviderErrorEnvelope,
    StatusPayload,
)

STATUS_OK = 200


@dataclass(frozen=True)
class LocalTimes:
    observed_at: datetime
    sunrise: datetime
    sunset: datetime


def fixed_offset(utc_offset_seconds: int) -> timezone:
    try:
        return timezone(timedelta(seconds=utc_offset_seconds))
    except (ValueError, OverflowError) as e:
        raise TimestampOutOfRange("timezone", utc_offset_seconds) from e


def local_datetime(field: str, unix_seconds: int, tz: timezone) -> datetime:
    try:
        return datetime.fromtimestamp(unix_seconds, tz=tz)
    except (ValueError, OverflowError, OSError) as e:
        raise TimestampOutOfRange(field, unix_seconds) from e


def normalize_timestamps(
    *, observed_at: int, sunrise: int, sunset: int, utc_offset_seconds: int
) -> LocalTimes:
    """Shift the three UNIX timestamps of a response into the location's local time.

    The provider reports only a second offset from UTC, so every result carries
    a fixed-offset ``tzinfo`` built once from ``utc_offset_seconds``.
    """
    tz = fixed_offset(utc_offset_seconds)
    return LocalTimes(
        observed_at=local_datetime("dt", observed_at, tz),
        sunrise=local_datetime("sys.sunrise", sunrise, tz),
        sunset=local_datetime("sys.sunset", sunset, tz),
    )


def parse_current_weather(body: str | bytes | Mapping[str, Any]) -> CurrentWeather:
    """Parse a current-weather response body into a :class:`CurrentWeather`.

    Raises :class:`ProviderError` for the provider's ``{cod, message}`` error
    envelope, :class:`MalformedResponse` when a required field is missing or
    has the wrong type, and :class:`TimestampOutOfRange` when a timestamp
    cannot be represented.
    """
    payload = _decode(body)

    try:
        status = StatusPayload.model_validate(payload)
    except ValidationError as e:
        raise _malformed(e) from e
    if status.cod != STATUS_OK:
        try:
            envelope = ProviderErrorEnvelope.model_validate(payload)
        except ValidationError as e:
            raise _malformed(e) from e
        raise ProviderError(envelope.cod, envelope.message)

    try:
        parsed = CurrentWeatherPayload.model_validate(payload)
    except ValidationError as e:
        raise _malformed(e) from e

    local = normalize_timestamps(
        observed_at=parsed.dt,
        sunrise=parsed.sys.sunrise,
        sunset=parsed.sys.sunset,
        utc_offset_seconds=parsed.timezone,
    )

    return CurrentWeather(
        coordinates=Coordinates(latitude=parsed.coord.lat, longitude=parsed.coord.lon),
        conditions=tuple(
            WeatherCondition(id=w.id, main=w.main, description=w.description, icon=w.icon)
            for w in parsed.weather
        ),
        main=MainMeasurements(
            temperature=parsed.main.temp,
            feels_like=parsed.main.feels_like,
            temp_min=parsed.main.temp_min,
            temp_max=parsed.main.temp_max,
            pressure=parsed.main.pressure,
            humidity=parsed.main.humidity,
            sea_level=parsed.main.sea_level,
            ground_level=parsed.main.grnd_level,
        ),
        wind=Wind(speed=parsed.wind.speed, direction=parsed.wind.deg, gust=parsed.wind.gust),
        clouds=Clouds(coverage=parsed.clouds.all),
        observed_at=parsed.dt,
        utc_offset_seconds=parsed.timezone,
        system_info=SystemInfo(
            sunrise=parsed.sys.sunrise,
            sunset=parsed.sys.sunset,
            country=parsed.sys.country,
        ),
        location_id=parsed.id,
        location_name=parsed.name,
        status_code=status.cod,
        observed_at_local=local.observed_at,
        sunrise_local=local.sunrise,
        sunset_local=local.sunset,
        visibility=parsed.visibility,
        rain=_precipitation(parsed.rain),
        snow=_precipitation(parsed.snow),
    )


def _decode(body: str | bytes | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(body, Mapping):
        return dict(body)
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise MalformedResponse("<body>", "not valid JSON") from e
    if not isinstance(payload, dict):
        raise MalformedResponse("<body>", "expected a JSON object")
    return payload


def _malformed(error: ValidationError) -> MalformedResponse:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "<body>"
    return MalformedResponse(field, first["msg"])


def _precipitation(payload: PrecipitationPayload | None) -> Precipitation | None:
    if payload is None:
        return None
    return Precipitation(one_hour=payload.one_hour, three_hour=payload.three_hour)
