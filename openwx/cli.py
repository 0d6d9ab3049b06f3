"""Command line interface for the current-weather client."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from pydantic import TypeAdapter

from openwx.clients.openweather import OpenWeatherClient, WeatherTransport
from openwx.core.config import Settings, load_settings
from openwx.core.exceptions import (
    InvalidCredential,
    MalformedResponse,
    OpenWeatherError,
    ProviderError,
    TimestampOutOfRange,
    TransportFailure,
)
from openwx.core.logging import configure_logging
from openwx.models.weather import Coordinates, CurrentWeather, Units

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_CREDENTIAL = 2
EXIT_TRANSPORT_FAILURE = 3
EXIT_PROVIDER_ERROR = 4
EXIT_MALFORMED_RESPONSE = 5

UNIT_LABELS: dict[Units, tuple[str, str]] = {
    Units.STANDARD: ("K", "m/s"),
    Units.METRIC: ("°C", "m/s"),
    Units.IMPERIAL: ("°F", "mph"),
}


def exit_code_for(error: OpenWeatherError) -> int:
    if isinstance(error, InvalidCredential):
        return EXIT_INVALID_CREDENTIAL
    if isinstance(error, TransportFailure):
        return EXIT_TRANSPORT_FAILURE
    if isinstance(error, ProviderError):
        return EXIT_PROVIDER_ERROR
    if isinstance(error, (MalformedResponse, TimestampOutOfRange)):
        return EXIT_MALFORMED_RESPONSE
    return 1


def render_text(weather: CurrentWeather, units: Units) -> str:
    temp_unit, speed_unit = UNIT_LABELS[units]
    place = weather.location_name or "Unknown location"
    if weather.system_info.country:
        place = f"{place}, {weather.system_info.country}"

    lines = [
        f"{place} ({weather.coordinates.latitude}, {weather.coordinates.longitude})",
        f"Observed: {weather.observed_at_local.isoformat()}",
        "Conditions: "
        + "; ".join(f"{c.main} ({c.description})" for c in weather.conditions),
        f"Temperature: {weather.main.temperature} {temp_unit} "
        f"(feels like {weather.main.feels_like} {temp_unit})",
        f"Humidity: {weather.main.humidity}%",
        f"Pressure: {weather.main.pressure} hPa",
        f"Cloud cover: {weather.clouds.coverage}%",
    ]
    if weather.visibility is not None:
        lines.append(f"Visibility: {weather.visibility} m")

    wind = f"Wind: {weather.wind.speed} {speed_unit}"
    if weather.wind.gust is not None:
        wind += f" (gusts {weather.wind.gust} {speed_unit})"
    lines.append(wind)
    lines.append(
        f"Wind coming from: {weather.wind.compass_point()}, "
        f"blowing towards: {weather.wind.blowing_towards()}"
    )
    lines.append(f"Sunrise: {weather.sunrise_local.time().isoformat()}")
    lines.append(f"Sunset: {weather.sunset_local.time().isoformat()}")
    return "\n".join(lines)


def render_json(weather: CurrentWeather) -> str:
    return TypeAdapter(CurrentWeather).dump_json(weather, indent=2).decode()


def build_parser(settings: Settings, prog_name: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog_name,
        description="Fetch the current weather at a position from OpenWeather.",
    )
    parser.add_argument(
        "--lat",
        type=float,
        default=settings.default_latitude,
        help="latitude of the query position (default: %(default)s)",
    )
    parser.add_argument(
        "--lon",
        type=float,
        default=settings.default_longitude,
        help="longitude of the query position (default: %(default)s)",
    )
    parser.add_argument(
        "-k",
        "--api-key",
        default=settings.api_key,
        help="OpenWeather API key (default: $OPENWX_API_KEY)",
    )
    parser.add_argument(
        "--units",
        type=Units,
        choices=list(Units),
        default=settings.units,
        help="unit system for the response (default: %(default)s)",
    )
    parser.add_argument("--json", action="store_true", help="print the result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(
    argv: list[str] | None = None,
    *,
    settings: Settings | None = None,
    transport: WeatherTransport | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    settings = settings or load_settings()
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = build_parser(settings).parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else settings.log_level)

    client = OpenWeatherClient(
        api_key=args.api_key,
        transport=transport,
        units=args.units,
        base_url=settings.base_url_str,
        timeout_seconds=settings.timeout_seconds,
        user_agent=settings.user_agent,
    )
    try:
        weather = client.current_weather(Coordinates(latitude=args.lat, longitude=args.lon))
    except OpenWeatherError as e:
        logger.debug("request failed", exc_info=True)
        print(f"error: {e}", file=stderr)
        return exit_code_for(e)
    finally:
        client.close()

    if args.json:
        print(render_json(weather), file=stdout)
    else:
        print(render_text(weather, args.units), file=stdout)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
