"""vibestatus data models."""

from vibestatus.models.completion import CompletionResult
from vibestatus.models.prompt import PromptSpec, ThemeKey
from vibestatus.models.status import Metrics, StatusRecord
from vibestatus.models.weather import WeatherReading

__all__ = [
    "CompletionResult",
    "Metrics",
    "PromptSpec",
    "StatusRecord",
    "ThemeKey",
    "WeatherReading",
]
