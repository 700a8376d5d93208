"""Status record model: the JSON document the website reads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_MESSAGE_CHARS = 220
MAX_CHIPS = 6
MAX_CHIP_CHARS = 24
PERCENT_BOUNDS = (0, 100)
CAFFEINE_BOUNDS = (0, 8)
HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"

Okayness = bool | Literal["meh"]


class Metrics(BaseModel):
    """Bounded mood gauges shown on the structured status card."""

    model_config = ConfigDict(frozen=True)

    stability: int = Field(ge=PERCENT_BOUNDS[0], le=PERCENT_BOUNDS[1])
    optimism: int = Field(ge=PERCENT_BOUNDS[0], le=PERCENT_BOUNDS[1])
    chaos: int = Field(ge=PERCENT_BOUNDS[0], le=PERCENT_BOUNDS[1])
    caffeine_cups: int = Field(ge=CAFFEINE_BOUNDS[0], le=CAFFEINE_BOUNDS[1])


class StatusRecord(BaseModel):
    """The published status. Optional fields are omitted when unset."""

    model_config = ConfigDict(frozen=True)

    message: str
    updated_at: datetime
    weather: str | None = None
    ok: Okayness | None = None
    mood_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    metrics: Metrics | None = None
    chips: list[str] | None = Field(default=None, max_length=MAX_CHIPS)

    @field_validator("message")
    @classmethod
    def _clip_message(cls, value: str) -> str:
        return value[:MAX_MESSAGE_CHARS].rstrip()

    @property
    def structured(self) -> bool:
        return self.metrics is not None

    def to_document(self) -> dict[str, object]:
        """JSON-ready dict with unset optional fields dropped."""
        return self.model_dump(mode="json", exclude_none=True)
