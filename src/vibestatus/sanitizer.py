"""Validation and clamping of structured model output.

The model is an untrusted text generator: ``sanitize`` is total over all
strings and every field of the returned record is defaulted and clamped
independently, so nothing unvalidated reaches the published document.
"""

from __future__ import annotations

import json
import math
import re
from datetime import UTC, datetime
from typing import Any

from vibestatus.config import DEFAULT_SUBJECT
from vibestatus.models.status import (
    CAFFEINE_BOUNDS,
    MAX_CHIP_CHARS,
    MAX_CHIPS,
    MAX_MESSAGE_CHARS,
    PERCENT_BOUNDS,
    Metrics,
    Okayness,
    StatusRecord,
)
from vibestatus.models.weather import WeatherReading

SAFE_MESSAGE_TEMPLATE = "{subject} is… ineffably okay."
SAFE_MESSAGE = SAFE_MESSAGE_TEMPLATE.format(subject=DEFAULT_SUBJECT)
DEFAULT_MOOD_COLOR = "#7C3AED"
DEFAULT_OK: Okayness = "meh"
DEFAULT_CHIPS = ("vibes", "status nominal")

FIXED_METRIC_DEFAULTS = {
    "stability": 60,
    "optimism": 60,
    "chaos": 40,
    "caffeine_cups": 2,
}

_FENCE_RE = re.compile(r"^\s*```[a-zA-Z0-9_-]*\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL)
_HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{6})$")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if the model added one."""
    match = _FENCE_RE.match(text)
    return match.group(1).strip() if match else text.strip()


def parse_object(raw_text: str) -> dict[str, Any]:
    """Best-effort JSON object extraction. Anything unparseable becomes ``{}``."""
    body = strip_code_fences(raw_text or "")
    candidates = [body]
    start, end = body.find("{"), body.rfind("}")
    if start != -1 and end > start:
        # prose around the object
        candidates.append(body[start : end + 1])
    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except (ValueError, RecursionError):
            continue
        if isinstance(data, dict):
            return data
    return {}


def _as_number(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        # exact; may be far outside float range
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def clamp_int(value: Any, lo: int, hi: int, default: int) -> int:
    """Coerce to a finite number, round, and clamp into ``[lo, hi]``."""
    number = _as_number(value)
    if number is None:
        return max(lo, min(hi, default))
    return max(lo, min(hi, round(number)))


def sanitize_ok(value: Any) -> Okayness:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
    return DEFAULT_OK


def sanitize_message(value: Any, subject: str = DEFAULT_SUBJECT) -> str:
    if isinstance(value, str):
        text = _WHITESPACE_RE.sub(" ", value).strip()
        if text:
            return text[:MAX_MESSAGE_CHARS].rstrip()
    return SAFE_MESSAGE_TEMPLATE.format(subject=subject)


def sanitize_color(value: Any) -> str:
    if isinstance(value, str):
        match = _HEX_RE.match(value.strip())
        if match:
            return f"#{match.group(1).upper()}"
    return DEFAULT_MOOD_COLOR


def metric_defaults(weather: WeatherReading | None) -> dict[str, int]:
    """Fallback gauges, derived from the weather when it is known."""
    if weather is None:
        return dict(FIXED_METRIC_DEFAULTS)
    comfort = 80 - abs(weather.feels_like_f - 70)
    return {
        "stability": 40 if weather.precipitation_mm else 60,
        "optimism": comfort,
        "chaos": 20 + 3 * weather.wind_mph,
        "caffeine_cups": 3 if weather.feels_like_f < 45 else 2,
    }


def sanitize_metrics(value: Any, weather: WeatherReading | None = None) -> Metrics:
    raw = value if isinstance(value, dict) else {}
    if "caffeine_cups" not in raw and "caffeineCups" in raw:
        raw = {**raw, "caffeine_cups": raw["caffeineCups"]}
    defaults = metric_defaults(weather)
    lo, hi = PERCENT_BOUNDS
    return Metrics(
        stability=clamp_int(raw.get("stability"), lo, hi, defaults["stability"]),
        optimism=clamp_int(raw.get("optimism"), lo, hi, defaults["optimism"]),
        chaos=clamp_int(raw.get("chaos"), lo, hi, defaults["chaos"]),
        caffeine_cups=clamp_int(
            raw.get("caffeine_cups"), *CAFFEINE_BOUNDS, defaults["caffeine_cups"]
        ),
    )


def chip_defaults(weather: WeatherReading | None) -> list[str]:
    if weather is None:
        return list(DEFAULT_CHIPS)
    return [
        weather.condition_text[:MAX_CHIP_CHARS],
        f"{weather.temperature_f}°F",
        f"wind {weather.wind_mph} mph",
    ]


def sanitize_chips(value: Any, weather: WeatherReading | None = None) -> list[str]:
    if isinstance(value, list):
        chips = [
            _WHITESPACE_RE.sub(" ", item).strip()[:MAX_CHIP_CHARS].rstrip()
            for item in value
            if isinstance(item, str)
        ]
        chips = [chip for chip in chips if chip][:MAX_CHIPS]
        if chips:
            return chips
    return chip_defaults(weather)


def sanitize(
    raw_text: str,
    weather: WeatherReading | None = None,
    now: datetime | None = None,
    subject: str = DEFAULT_SUBJECT,
) -> StatusRecord:
    """Turn arbitrary model output into a fully populated, in-bounds record."""
    data = parse_object(raw_text)
    return StatusRecord(
        message=sanitize_message(data.get("message"), subject),
        updated_at=now or datetime.now(UTC),
        weather=weather.summary_line() if weather is not None else None,
        ok=sanitize_ok(data.get("ok")),
        mood_color=sanitize_color(data.get("mood_color", data.get("moodColor"))),
        metrics=sanitize_metrics(data.get("metrics"), weather),
        chips=sanitize_chips(data.get("chips"), weather),
    )
