from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Wrong-typed values are rejected rather than coerced; ints may still widen to floats.
WIRE_CONFIG = ConfigDict(strict=True)


class CoordPayload(BaseModel):
    model_config = WIRE_CONFIG

    lat: float
    lon: float


class WeatherPayload(BaseModel):
    model_config = WIRE_CONFIG

    id: int
    main: str
    description: str
    icon: str


class MainPayload(BaseModel):
    model_config = WIRE_CONFIG

    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: int
    humidity: int
    sea_level: int | None = None
    grnd_level: int | None = None


class WindPayload(BaseModel):
    model_config = WIRE_CONFIG

    speed: float
    deg: int
    gust: float | None = None


class CloudsPayload(BaseModel):
    model_config = WIRE_CONFIG

    all: int


class PrecipitationPayload(BaseModel):
    model_config = WIRE_CONFIG

    one_hour: float | None = Field(default=None, alias="1h")
    three_hour: float | None = Field(default=None, alias="3h")


class SysPayload(BaseModel):
    model_config = WIRE_CONFIG

    country: str | None = None
    sunrise: int
    sunset: int


class CurrentWeatherPayload(BaseModel):
    """Body of a successful ``/data/2.5/weather`` response.

    Field names follow the wire format; unknown keys such as ``base``,
    ``message`` or ``sys.type`` are ignored. ``cod`` is read separately by
    :class:`StatusPayload`.
    """

    model_config = WIRE_CONFIG

    coord: CoordPayload
    weather: list[WeatherPayload] = Field(min_length=1)
    main: MainPayload
    visibility: int | None = None
    wind: WindPayload
    clouds: CloudsPayload
    rain: PrecipitationPayload | None = None
    snow: PrecipitationPayload | None = None
    dt: int
    sys: SysPayload
    timezone: int
    id: int
    name: str


class StatusPayload(BaseModel):
    model_config = WIRE_CONFIG

    cod: int

    @field_validator("cod", mode="before")
    @classmethod
    def _numeric_string_cod(cls, v: object) -> object:
        # The provider sends ``cod`` as a number on some responses and a numeric string on others.
        if isinstance(v, str) and v.strip().isdigit():
            return int(v)
        return v


class ProviderErrorEnvelope(StatusPayload):
    message: str = ""
