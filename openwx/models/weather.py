from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

COMPASS_POINTS: tuple[str, ...] = (
    "N",
    "NNE",
    "NE",
    "ENE",
    "E",
    "ESE",
    "SE",
    "SSE",
    "S",
    "SSW",
    "SW",
    "WSW",
    "W",
    "WNW",
    "NW",
    "NNW",
)


class Units(str, Enum):
    """Unit systems accepted by the ``units`` query parameter.

    ``standard`` is what the provider uses when the parameter is omitted:
    Kelvin and meter/sec. ``metric`` is Celsius and meter/sec, ``imperial`` is
    Fahrenheit and miles/hour.
    """

    STANDARD = "standard"
    METRIC = "metric"
    IMPERIAL = "imperial"

    def __str__(self) -> str:
        return self.value


def compass_point(degrees: int | float) -> str:
    sector = 360 / len(COMPASS_POINTS)
    index = int(((degrees % 360) + sector / 2) // sector) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class WeatherCondition:
    id: int
    main: str
    description: str
    icon: str


@dataclass(frozen=True)
class MainMeasurements:
    temperature: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: int
    humidity: int
    sea_level: int | None = None
    ground_level: int | None = None


@dataclass(frozen=True)
class Wind:
    speed: float
    direction: int
    gust: float | None = None

    def compass_point(self) -> str:
        """Compass point the wind is coming from (meteorological convention)."""
        return compass_point(self.direction)

    def blowing_towards(self) -> str:
        return compass_point(self.direction + 180)


@dataclass(frozen=True)
class Clouds:
    coverage: int


@dataclass(frozen=True)
class Precipitation:
    one_hour: float | None = None
    three_hour: float | None = None


@dataclass(frozen=True)
class SystemInfo:
    sunrise: int
    sunset: int
    country: str | None = None


@dataclass(frozen=True)
class CurrentWeather:
    coordinates: Coordinates
    conditions: tuple[WeatherCondition, ...]
    main: MainMeasurements
    wind: Wind
    clouds: Clouds
    observed_at: int
    utc_offset_seconds: int
    system_info: SystemInfo
    location_id: int
    location_name: str
    status_code: int

    observed_at_local: datetime
    sunrise_local: datetime
    sunset_local: datetime

    visibility: int | None = None
    rain: Precipitation | None = None
    snow: Precipitation | None = None

    @property
    def primary_condition(self) -> WeatherCondition:
        return self.conditions[0]
