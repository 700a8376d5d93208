"""End-to-end status generation: weather, prompt, completion, publish."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from vibestatus.api_logging import log_service_call
from vibestatus.completion import CompletionClient, RetryPolicy
from vibestatus.config import Settings
from vibestatus.formatter import StatusFormatter
from vibestatus.models.status import MAX_MESSAGE_CHARS, StatusRecord
from vibestatus.models.weather import WeatherReading
from vibestatus.prompts import PromptComposer
from vibestatus.publisher import StatusPublisher, fallback_record
from vibestatus.results import Failure, Result, Success
from vibestatus.sanitizer import SAFE_MESSAGE_TEMPLATE, sanitize
from vibestatus.weather import WeatherClient

logger = logging.getLogger(__name__)


def empty_reply_message(settings: Settings, weather: WeatherReading | None) -> str:
    """What to say when the model answered with nothing."""
    if weather is None:
        return SAFE_MESSAGE_TEMPLATE.format(subject=settings.subject)
    return (
        f"{settings.location_name} weather: {weather.summary_line()}. "
        f"{settings.subject} is probably fine."
    )


class StatusPipeline:
    """One status run. Collaborators are injectable for tests.

    Usage:
        pipeline = StatusPipeline(settings, StatusPublisher(path))
        match pipeline.run():
            case Success(value=path): ...
            case Failure(error=err): ...
    """

    def __init__(
        self,
        settings: Settings,
        publisher: StatusPublisher,
        weather_client: WeatherClient | None = None,
        completion_client: CompletionClient | None = None,
        rng: random.Random | None = None,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self.settings = settings
        self.publisher = publisher
        self._rng = rng or random.SystemRandom()
        self._weather_client = weather_client
        self._completion_client = completion_client
        self._retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep
        self._clock = clock
        self.composer = PromptComposer(
            self._rng,
            subject=settings.subject,
            location_name=settings.location_name,
        )
        self.formatter = StatusFormatter(self._rng)

    def _weather(self) -> WeatherClient:
        if self._weather_client is None:
            self._weather_client = WeatherClient(timeout=self.settings.timeout)
        return self._weather_client

    def _completion(self) -> CompletionClient:
        if self._completion_client is None:
            self._completion_client = CompletionClient(
                api_key=self.settings.openai_api_key or "",
                model=self.settings.model,
                timeout=self.settings.timeout,
                rng=self._rng,
                sleep=self._sleep,
            )
        return self._completion_client

    def _decorate(self, text: str) -> str:
        return self.formatter.format(text, max_chars=MAX_MESSAGE_CHARS)

    def close(self) -> None:
        for client in (self._weather_client, self._completion_client):
            if client is not None:
                client.close()

    def fetch_weather(self) -> WeatherReading | None:
        s = self.settings
        match self._weather().fetch_current_conditions(s.latitude, s.longitude, s.timezone):
            case Success(value=reading):
                return reading
            case Failure(error=err):
                logger.warning("Continuing without weather: %s", err)
                return None

    def generate(self) -> StatusRecord | None:
        """Build a record from live calls, or ``None`` if the completion failed."""
        weather = self.fetch_weather()
        prompt = self.composer.compose_prompt(weather, structured=self.settings.structured)
        logger.info("Theme %s, seed word %r", prompt.theme_key.value, prompt.seed_word)

        match self._completion().complete(prompt, self._retry_policy):
            case Failure(error=err):
                logger.error("Completion failed, publishing fallback: %s", err)
                return None
            case Success(value=completion):
                raw_text = completion.raw_text

        now = self._clock()
        if self.settings.structured:
            record = sanitize(raw_text, weather, now=now, subject=self.settings.subject)
            return StatusRecord.model_validate(
                {**record.model_dump(), "message": self._decorate(record.message)}
            )

        if not raw_text:
            logger.warning("Model returned no text; using stock line")
        message = raw_text or empty_reply_message(self.settings, weather)
        return StatusRecord(
            message=self._decorate(message),
            updated_at=now,
            weather=weather.summary_line() if weather is not None else None,
        )

    def _generate_or_none(self) -> StatusRecord | None:
        try:
            return self.generate()
        except Exception:
            logger.exception("Status generation failed; using fallback status")
            return None

    def build_record(self) -> StatusRecord:
        """The record to publish this run: generated, or the fallback."""
        if not self.settings.has_api_key:
            logger.warning("OPENAI_API_KEY missing; using fallback status")
            return fallback_record(self._clock())
        record = self._generate_or_none()
        return record if record is not None else fallback_record(self._clock())

    @log_service_call
    def run(self) -> Result[Path]:
        """Generate and publish. Only a failed write is a failed run."""
        if not self.settings.has_api_key:
            logger.warning("OPENAI_API_KEY missing; publishing fallback status")
            return self.publisher.publish_fallback()
        record = self._generate_or_none()
        if record is None:
            return self.publisher.publish_fallback()
        return self.publisher.publish(record)


def generate_status(settings: Settings, output_path: Path, **kwargs: object) -> Result[Path]:
    """Run the pipeline once and publish to ``output_path``."""
    pipeline = StatusPipeline(settings, StatusPublisher(output_path), **kwargs)  # type: ignore[arg-type]
    try:
        return pipeline.run()
    finally:
        pipeline.close()
