"""Current-conditions client for the Open-Meteo forecast API."""

from __future__ import annotations

import math
from typing import Any

from pydantic import ValidationError

from vibestatus._http import DEFAULT_TIMEOUT, SyncTransport
from vibestatus.api_logging import log_api_call
from vibestatus.exceptions import TransportError, WeatherUnavailableError
from vibestatus.models.weather import WeatherReading
from vibestatus.results import Failure, Result, Success

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
CURRENT_FIELDS = (
    "temperature_2m",
    "apparent_temperature",
    "precipitation",
    "weather_code",
    "wind_speed_10m",
)
UNKNOWN_CONDITIONS = "unknown conditions"

# WMO weather interpretation codes
CONDITION_TEXT: dict[int, str] = {
    0: "clear sky",
    1: "mainly clear",
    2: "partly cloudy",
    3: "overcast",
    45: "fog",
    48: "freezing fog",
    51: "light drizzle",
    53: "drizzle",
    55: "heavy drizzle",
    56: "light freezing drizzle",
    57: "freezing drizzle",
    61: "light rain",
    63: "rain",
    65: "heavy rain",
    66: "light freezing rain",
    67: "freezing rain",
    71: "light snow",
    73: "snow",
    75: "heavy snow",
    77: "snow grains",
    80: "light showers",
    81: "showers",
    82: "heavy showers",
    85: "light snow showers",
    86: "snow showers",
    95: "thunderstorm",
    96: "thunderstorm with hail",
    99: "severe thunderstorm with hail",
}


def describe_condition(code: Any) -> str:
    """Map a WMO code to text, falling back to ``unknown conditions``."""
    if isinstance(code, bool) or not isinstance(code, (int, float)) or not math.isfinite(code):
        return UNKNOWN_CONDITIONS
    return CONDITION_TEXT.get(int(code), UNKNOWN_CONDITIONS)


def parse_current(body: dict[str, Any]) -> WeatherReading:
    """Build a reading from an Open-Meteo response body.

    Raises:
        WeatherUnavailableError: If ``current`` is missing or incomplete.
    """
    current = body.get("current")
    if not isinstance(current, dict):
        raise WeatherUnavailableError("Weather response has no 'current' object")
    try:
        code = current.get("weather_code")
        return WeatherReading(
            temperature_f=round(float(current["temperature_2m"])),
            feels_like_f=round(float(current["apparent_temperature"])),
            wind_mph=round(float(current["wind_speed_10m"])),
            precipitation_mm=float(current.get("precipitation") or 0.0),
            condition_text=describe_condition(code),
            weather_code=int(code) if isinstance(code, (int, float)) else None,
        )
    except (KeyError, TypeError, ValueError, OverflowError, ValidationError) as exc:
        raise WeatherUnavailableError(f"Malformed weather response: {exc}") from exc


class WeatherClient:
    """Best-effort weather lookup. Never retries.

    Usage:
        with WeatherClient() as weather:
            result = weather.fetch_current_conditions(39.739, -75.539, "America/New_York")
    """

    def __init__(
        self,
        base_url: str = OPEN_METEO_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._base_url = base_url
        self._transport = SyncTransport(timeout=timeout)

    def __enter__(self) -> WeatherClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection."""
        self._transport.close()

    @log_api_call
    def fetch_current_conditions(
        self, latitude: float, longitude: float, timezone: str
    ) -> Result[WeatherReading]:
        """Fetch current conditions, or a ``Failure(WeatherUnavailableError)``."""
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(CURRENT_FIELDS),
            "temperature_unit": "fahrenheit",
            "wind_speed_unit": "mph",
            "precipitation_unit": "mm",
            "timezone": timezone,
        }
        try:
            body = self._transport.get(
                self._base_url, params, headers={"Cache-Control": "no-store"}
            )
            return Success(parse_current(body))
        except WeatherUnavailableError as exc:
            return Failure(exc)
        except TransportError as exc:
            error = WeatherUnavailableError(f"Weather fetch failed: {exc}")
            error.__cause__ = exc
            return Failure(error)
