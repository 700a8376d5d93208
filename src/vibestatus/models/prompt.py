"""Prompt specification model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ThemeKey(str, Enum):
    """Stylistic frames a status line can be written in."""

    WEATHER = "weather"
    FANTASY = "fantasy"
    SPACE = "space"
    CORPORATE = "corporate"
    SURREAL = "surreal"
    HAIKU = "haiku"


class PromptSpec(BaseModel):
    """Everything sent to the completion provider as the user message."""

    model_config = ConfigDict(frozen=True)

    theme_key: ThemeKey
    instruction_text: str
    seed_word: str
    constraint_text: str
    context_text: str | None = None
    output_contract: str | None = None

    @property
    def structured(self) -> bool:
        return self.output_contract is not None

    @property
    def user_prompt(self) -> str:
        parts = [self.instruction_text, ""]
        if self.context_text:
            parts.append(self.context_text)
        parts.append(f'Also weave in this loose inspiration: "{self.seed_word}".')
        parts.append(self.constraint_text)
        if self.output_contract:
            parts.append(self.output_contract)
        return "\n".join(parts)
