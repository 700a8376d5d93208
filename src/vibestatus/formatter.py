"""Cosmetic decoration of the final status line."""

from __future__ import annotations

import random
import re

PREFIXES: tuple[str, ...] = (
    "✅", "🪩", "🧭", "🌤️", "✨", "🛰️", "🍩", "🐉", "🎸", "📡", "💾", "🦦",
)
SUFFIXES: tuple[str, ...] = (
    "— carry on.",
    "— vibes intact.",
    "— probably fine.",
    "— onward.",
    "— status nominal.",
    "— questionable but acceptable.",
    "— cosmic alignment achieved.",
)

_WHITESPACE_RE = re.compile(r"\s+")
AFFIX_ROOM = max(map(len, PREFIXES)) + max(map(len, SUFFIXES)) + 2


class StatusFormatter:
    """Wraps text in one random glyph and one random sign-off."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.SystemRandom()

    def format(self, text: str, max_chars: int | None = None) -> str:
        """Decorate ``text``; with ``max_chars`` the body is cut so both affixes fit."""
        if max_chars is not None:
            text = text[: max(0, max_chars - AFFIX_ROOM)].rstrip()
        decorated = f"{self._rng.choice(PREFIXES)} {text} {self._rng.choice(SUFFIXES)}"
        return _WHITESPACE_RE.sub(" ", decorated).strip()
