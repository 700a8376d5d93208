"""Shared test fixtures and sample API responses."""

from __future__ import annotations

import random

import pytest

from vibestatus.config import Settings

WEATHER_URL = "https://api.open-meteo.com/v1/forecast"
CHAT_URL = "https://api.openai.com/v1/chat/completions"


SAMPLE_WEATHER = {
    "latitude": 39.74,
    "longitude": -75.54,
    "timezone": "America/New_York",
    "current_units": {
        "temperature_2m": "°F",
        "apparent_temperature": "°F",
        "precipitation": "mm",
        "weather_code": "wmo code",
        "wind_speed_10m": "mp/h",
    },
    "current": {
        "time": "2026-10-19T09:00",
        "interval": 900,
        "temperature_2m": 72,
        "apparent_temperature": 70,
        "precipitation": 0,
        "weather_code": 1,
        "wind_speed_10m": 5,
    },
}

SAMPLE_RAINY_WEATHER = {
    "current": {
        "temperature_2m": 48.6,
        "apparent_temperature": 44.2,
        "precipitation": 1.2,
        "weather_code": 63,
        "wind_speed_10m": 14.4,
    },
}


def chat_response(content: str | None) -> dict:
    """A chat completions body whose first choice says ``content``."""
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="sk-test")


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def fake_sleep(sleeps):
    return sleeps.append
