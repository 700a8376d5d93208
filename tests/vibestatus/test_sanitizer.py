"""Tests for the response sanitizer."""

from __future__ import annotations

import json
import re
from datetime import UTC, datetime

import pytest

from vibestatus.models.status import (
    CAFFEINE_BOUNDS,
    HEX_COLOR_PATTERN,
    MAX_CHIP_CHARS,
    MAX_CHIPS,
    MAX_MESSAGE_CHARS,
    PERCENT_BOUNDS,
    StatusRecord,
)
from vibestatus.sanitizer import (
    DEFAULT_MOOD_COLOR,
    FIXED_METRIC_DEFAULTS,
    SAFE_MESSAGE,
    SAFE_MESSAGE_TEMPLATE,
    clamp_int,
    parse_object,
    sanitize,
    strip_code_fences,
)
from vibestatus.weather import parse_current
from tests.conftest import SAMPLE_RAINY_WEATHER, SAMPLE_WEATHER

METRIC_NAMES = ("stability", "optimism", "chaos", "caffeine_cups")

HOSTILE_INPUTS = [
    "",
    "   ",
    "definitely not json",
    "{",
    "[]",
    "null",
    "42",
    "{}",
    '{"message": null, "metrics": null, "chips": null}',
    '{"metrics": {"stability": 1e400, "optimism": "NaN", "chaos": -5, "caffeine_cups": 99}}',
    '{"metrics": {"stability": true, "optimism": [1], "chaos": {"a": 1}}}',
    '{"mood_color": "neon", "ok": "maybe", "chips": "not a list"}',
    '{"mood_color": "#12345G", "chips": [1, 2, null, ""]}',
    json.dumps({"message": "x" * 5000, "chips": ["chip"] * 50}),
    json.dumps({"chips": ["a" * 200]}),
    "```json\n{\"ok\": true}\n```",
    '{"metrics": {' + ", ".join(f'"{name}": 1' + "0" * 400 for name in METRIC_NAMES) + "}}",
    '{"metrics": {' + ", ".join(f'"{name}": -1' + "0" * 400 for name in METRIC_NAMES) + "}}",
    json.dumps({"metrics": {name: "1" * 400 for name in METRIC_NAMES}}),
    '{"metrics": {"chaos": 1' + "0" * 5000 + "}}",
    "[" * 5000,
]


def _assert_in_bounds(record: StatusRecord) -> None:
    assert 0 < len(record.message) <= MAX_MESSAGE_CHARS
    assert record.ok in (True, False, "meh")
    assert record.mood_color is not None
    assert re.match(HEX_COLOR_PATTERN, record.mood_color)
    assert record.metrics is not None
    for name in ("stability", "optimism", "chaos"):
        value = getattr(record.metrics, name)
        assert isinstance(value, int)
        assert PERCENT_BOUNDS[0] <= value <= PERCENT_BOUNDS[1]
    assert isinstance(record.metrics.caffeine_cups, int)
    assert CAFFEINE_BOUNDS[0] <= record.metrics.caffeine_cups <= CAFFEINE_BOUNDS[1]
    assert record.chips is not None
    assert 0 < len(record.chips) <= MAX_CHIPS
    assert all(isinstance(c, str) and 0 < len(c) <= MAX_CHIP_CHARS for c in record.chips)


class TestStripCodeFences:
    def test_json_fence(self) -> None:
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self) -> None:
        assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_no_fence(self) -> None:
        assert strip_code_fences('  {"a": 1} ') == '{"a": 1}'


class TestParseObject:
    def test_plain(self) -> None:
        assert parse_object('{"ok": false}') == {"ok": False}

    def test_prose_around_object(self) -> None:
        assert parse_object('Sure! {"ok": true} Hope that helps.') == {"ok": True}

    @pytest.mark.parametrize("text", ["", "nope", "[1, 2]", '"str"', "{broken"])
    def test_unparseable_is_empty(self, text: str) -> None:
        assert parse_object(text) == {}


class TestClampInt:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (50, 50),
            (150, 100),
            (-3, 0),
            (49.6, 50),
            ("77", 77),
            (" 12.2 ", 12),
            ("lots", 60),
            (None, 60),
            (True, 60),
            (float("inf"), 60),
            (float("nan"), 60),
            (10**400, 100),
            (-(10**400), 0),
            ("1" * 400, 60),
        ],
    )
    def test_values(self, value: object, expected: int) -> None:
        assert clamp_int(value, 0, 100, 60) == expected


class TestSanitize:
    @pytest.mark.parametrize("raw", HOSTILE_INPUTS)
    def test_always_in_bounds(self, raw: str) -> None:
        _assert_in_bounds(sanitize(raw))

    @pytest.mark.parametrize("raw", HOSTILE_INPUTS)
    def test_always_in_bounds_with_weather(self, raw: str) -> None:
        _assert_in_bounds(sanitize(raw, parse_current(SAMPLE_RAINY_WEATHER)))

    def test_empty_object_defaults(self) -> None:
        record = sanitize("{}")
        assert record.ok == "meh"
        assert record.message == SAFE_MESSAGE
        assert record.mood_color == DEFAULT_MOOD_COLOR
        assert record.metrics.model_dump() == FIXED_METRIC_DEFAULTS
        assert record.chips == ["vibes", "status nominal"]
        assert record.weather is None

    def test_well_formed_passes_through(self) -> None:
        raw = json.dumps(
            {
                "ok": True,
                "message": "Hunter  is   thriving.",
                "mood_color": "#00ff88",
                "metrics": {"stability": 80, "optimism": 90, "chaos": 10, "caffeine_cups": 3},
                "chips": ["sunny", "focused"],
            }
        )
        record = sanitize(raw)
        assert record.ok is True
        assert record.message == "Hunter is thriving."
        assert record.mood_color == "#00FF88"
        assert record.metrics.stability == 80
        assert record.metrics.caffeine_cups == 3
        assert record.chips == ["sunny", "focused"]

    def test_clamps_out_of_range_and_bad_color(self) -> None:
        raw = '{"metrics":{"stability": 150, "caffeine_cups": -2}, "mood_color": "neon"}'
        record = sanitize(raw)
        assert record.metrics.stability == 100
        assert record.metrics.caffeine_cups == 0
        assert record.mood_color == DEFAULT_MOOD_COLOR

    def test_huge_integers_clamp_to_bounds(self) -> None:
        huge = "1" + "0" * 400
        raw = f'{{"metrics": {{"stability": {huge}, "optimism": -{huge}, "caffeine_cups": {huge}}}}}'
        record = sanitize(raw)
        assert record.metrics.stability == PERCENT_BOUNDS[1]
        assert record.metrics.optimism == PERCENT_BOUNDS[0]
        assert record.metrics.caffeine_cups == CAFFEINE_BOUNDS[1]
        assert record.metrics.chaos == FIXED_METRIC_DEFAULTS["chaos"]

    def test_huge_numeric_strings_use_defaults(self) -> None:
        record = sanitize(json.dumps({"metrics": {"stability": "1" * 400}}))
        assert record.metrics.stability == FIXED_METRIC_DEFAULTS["stability"]

    def test_safe_message_names_subject(self) -> None:
        record = sanitize("{}", subject="Robin")
        assert record.message == SAFE_MESSAGE_TEMPLATE.format(subject="Robin")
        assert "Hunter" not in record.message

    def test_bare_hex_gets_hash(self) -> None:
        assert sanitize('{"mood_color": "abcdef"}').mood_color == "#ABCDEF"

    def test_camel_case_aliases(self) -> None:
        record = sanitize('{"moodColor": "#112233", "metrics": {"caffeineCups": 5}}')
        assert record.mood_color == "#112233"
        assert record.metrics.caffeine_cups == 5

    @pytest.mark.parametrize(("raw", "expected"), [("true", True), ('"False"', False)])
    def test_ok_string_forms(self, raw: str, expected: bool) -> None:
        assert sanitize(f'{{"ok": {raw}}}').ok is expected

    def test_message_truncated(self) -> None:
        record = sanitize(json.dumps({"message": "word " * 200}))
        assert len(record.message) <= MAX_MESSAGE_CHARS

    def test_chips_truncated(self) -> None:
        record = sanitize(json.dumps({"chips": [f"chip{i}" for i in range(10)]}))
        assert record.chips == [f"chip{i}" for i in range(MAX_CHIPS)]

    def test_weather_derived_defaults(self) -> None:
        weather = parse_current(SAMPLE_WEATHER)
        record = sanitize("nonsense", weather)
        assert record.chips == ["mainly clear", "72°F", "wind 5 mph"]
        assert record.metrics.optimism == 80
        assert record.metrics.chaos == 35
        assert record.weather == weather.summary_line()

    def test_rain_lowers_stability_default(self) -> None:
        record = sanitize("{}", parse_current(SAMPLE_RAINY_WEATHER))
        assert record.metrics.stability < FIXED_METRIC_DEFAULTS["stability"]

    def test_uses_given_timestamp(self) -> None:
        now = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)
        assert sanitize("{}", now=now).updated_at == now
