"""Weather reading model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class WeatherReading(BaseModel):
    """Current conditions at the status location, in US units."""

    model_config = ConfigDict(frozen=True)

    temperature_f: int
    feels_like_f: int
    wind_mph: int
    precipitation_mm: float = 0.0
    condition_text: str
    weather_code: int | None = None

    def summary_line(self) -> str:
        """Human-readable one-liner, e.g. ``72°F (feels 70°F), mainly clear, wind 5 mph``."""
        line = (
            f"{self.temperature_f}°F (feels {self.feels_like_f}°F), "
            f"{self.condition_text}, wind {self.wind_mph} mph"
        )
        if self.precipitation_mm:
            line += f", precip {self.precipitation_mm:g} mm"
        return line
