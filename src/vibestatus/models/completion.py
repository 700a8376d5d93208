"""Completion result model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CompletionResult(BaseModel):
    """Raw text returned by the LLM. Untrusted and possibly empty."""

    model_config = ConfigDict(frozen=True)

    raw_text: str = ""
    attempts: int = 1
