from __future__ import annotations


class OpenWeatherError(Exception):
    pass


class InvalidCredential(OpenWeatherError):
    def __init__(self, message: str = "OpenWeather API key must be a non-empty string") -> None:
        super().__init__(message)


class TransportFailure(OpenWeatherError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ProviderError(OpenWeatherError):
    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"OpenWeather returned {code}: {message}")


class MalformedResponse(OpenWeatherError):
    def __init__(self, field: str, reason: str | None = None) -> None:
        self.field = field
        self.reason = reason
        detail = f"Malformed OpenWeather response at '{field}'"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)


class TimestampOutOfRange(OpenWeatherError):
    def __init__(self, field: str, value: int) -> None:
        self.field = field
        self.value = value
        super().__init__(f"'{field}' value {value} cannot be represented as a datetime")
