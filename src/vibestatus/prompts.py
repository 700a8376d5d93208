"""Prompt composition with controlled variety.

A theme is drawn first, then a template inside it, so runs rotate through
structurally different styles while the phrasing also changes. A seed word
unrelated to either is drawn independently to nudge the model off its
favourite outputs.
"""

from __future__ import annotations

import random

from vibestatus.models.prompt import PromptSpec, ThemeKey
from vibestatus.models.status import CAFFEINE_BOUNDS, MAX_CHIPS, MAX_MESSAGE_CHARS
from vibestatus.models.weather import WeatherReading

MAX_WORDS = 35

# "{subject}" is filled from settings
THEMES: dict[ThemeKey, tuple[str, ...]] = {
    ThemeKey.WEATHER: (
        "Write today's forecast for {subject}'s emotional climate.",
        "If {subject}'s mood were a weather system, describe it.",
        "Report live from the skies over {subject}'s inner world.",
    ),
    ThemeKey.FANTASY: (
        "As if in a D&D campaign, narrate {subject}'s current quest or condition.",
        "Describe {subject}'s vibe as though it were a magical aura or spell effect.",
        "Tell me {subject}'s alignment and current hit points in a dramatic tone.",
    ),
    ThemeKey.SPACE: (
        "Transmit a mission log update from {subject} aboard a retro spacecraft.",
        "As a cosmic radio DJ, broadcast {subject}'s current vibe to the galaxy.",
        "Describe {subject}'s emotional state as a distant celestial event.",
    ),
    ThemeKey.CORPORATE: (
        "Write a fake Slack status that subtly reveals {subject}'s mood.",
        "Summarize {subject}'s day in the style of a quarterly report headline.",
        "Generate a faux meeting note about {subject}'s wellbeing metrics.",
    ),
    ThemeKey.SURREAL: (
        "Describe {subject}'s day as a dream sequence directed by David Lynch.",
        "If {subject} were a color or sound today, what would it be?",
        "Write a tiny absurdist story about {subject}'s current vibe.",
    ),
    ThemeKey.HAIKU: (
        "Express {subject}'s current energy as a three-line haiku.",
        "Write a short poem about {subject}'s status in 17 syllables.",
        "Render {subject}'s vibe as an elegant minimalist haiku.",
    ),
}

SEED_WORDS: tuple[str, ...] = (
    "synthwave",
    "coffee",
    "time travel",
    "mushrooms",
    "data cloud",
    "seagull",
    "retro arcade",
    "tacos",
    "moonlight",
    "404 error",
    "bike ride",
    "armadillo",
    "quantum disco",
)

CONSTRAINT_TEXT = (
    f"Use ≤ {MAX_WORDS} words. Be playful and non-repetitive; vary sentence "
    "structure every time. No health or medical claims, no advice, no "
    "instructions. Avoid clichés."
)

STRUCTURED_CONTRACT = (
    "Reply with a single JSON object and nothing else, using exactly these keys: "
    '"ok" (true, false or "meh"), '
    f'"message" (the status line, at most {MAX_MESSAGE_CHARS} characters), '
    '"mood_color" (a hex color like "#7C3AED"), '
    '"metrics" (an object with integer "stability", "optimism" and "chaos" from 0 to 100, '
    f'and "caffeine_cups" from {CAFFEINE_BOUNDS[0]} to {CAFFEINE_BOUNDS[1]}), '
    f'"chips" (up to {MAX_CHIPS} very short tags).'
)


class PromptComposer:
    """Builds a fresh PromptSpec per run from an injected RNG."""

    def __init__(
        self,
        rng: random.Random | None = None,
        subject: str = "Hunter",
        location_name: str = "Wilmington, DE",
    ) -> None:
        self._rng = rng or random.SystemRandom()
        self._subject = subject
        self._location_name = location_name

    def compose_prompt(
        self, weather: WeatherReading | None, structured: bool = False
    ) -> PromptSpec:
        """Pick a theme, a template and a seed word, and ground on weather if known."""
        theme_key = self._rng.choice(list(THEMES))
        template = self._rng.choice(THEMES[theme_key])
        seed_word = self._rng.choice(SEED_WORDS)

        context_text = None
        if weather is not None:
            context_text = (
                f"Context: Current weather in {self._location_name} is: "
                f"{weather.summary_line()}."
            )

        return PromptSpec(
            theme_key=theme_key,
            instruction_text=template.format(subject=self._subject),
            seed_word=seed_word,
            constraint_text=CONSTRAINT_TEXT,
            context_text=context_text,
            output_contract=STRUCTURED_CONTRACT if structured else None,
        )
