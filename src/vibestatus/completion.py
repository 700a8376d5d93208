"""Chat-completion client for the status line."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from vibestatus._http import DEFAULT_TIMEOUT, SyncTransport
from vibestatus.api_logging import log_api_call
from vibestatus.exceptions import (
    APIError,
    CompletionFatalError,
    CompletionTransientError,
    ConnectionFailedError,
    RequestTimeoutError,
    TransportError,
)
from vibestatus.models.completion import CompletionResult
from vibestatus.models.prompt import PromptSpec
from vibestatus.results import Failure, Result, Success

logger = logging.getLogger(__name__)

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
SYSTEM_PROMPT = (
    "You craft short, varied, delightful status lines with high novelty. "
    "Each response must feel different in tone and structure."
)
TEMPERATURE = 1.3
TOP_P = 0.9
MAX_TOKENS = 90
MAX_SEED = 1_000_000_000


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-delay retry for transient completion failures."""

    attempts: int = 3
    delay_seconds: float = 0.7

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError("attempts must be at least 1")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")


def extract_content(body: dict[str, Any]) -> str:
    """Return the first choice's message text, or ``""`` if there is none."""
    choices = body.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    return content.strip() if isinstance(content, str) else ""


class CompletionClient:
    """Synchronous client for the chat completions endpoint.

    Usage:
        with CompletionClient(api_key) as llm:
            match llm.complete(prompt):
                case Success(value=result):
                    print(result.raw_text)
                case Failure(error=err):
                    ...
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = OPENAI_CHAT_URL,
        timeout: float = DEFAULT_TIMEOUT,
        rng: random.Random | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._model = model
        self._base_url = base_url
        self._rng = rng or random.SystemRandom()
        self._sleep = sleep
        self._transport = SyncTransport(
            timeout=timeout,
            headers={"Authorization": f"Bearer {api_key}"},
        )

    def __enter__(self) -> CompletionClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection."""
        self._transport.close()

    def build_payload(self, prompt: PromptSpec) -> dict[str, Any]:
        """Request body for one attempt, with a fresh advisory seed."""
        return {
            "model": self._model,
            "temperature": TEMPERATURE,
            "top_p": TOP_P,
            "max_tokens": MAX_TOKENS,
            "seed": self._rng.randrange(MAX_SEED),
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt.user_prompt},
            ],
        }

    def _attempt(self, payload: dict[str, Any]) -> str:
        """One POST. Raises CompletionTransientError or CompletionFatalError."""
        try:
            body = self._transport.post(self._base_url, payload)
        except (ConnectionFailedError, RequestTimeoutError) as exc:
            raise CompletionTransientError(str(exc)) from exc
        except APIError as exc:
            if exc.retryable:
                raise CompletionTransientError(str(exc)) from exc
            raise CompletionFatalError(str(exc)) from exc
        except TransportError as exc:
            raise CompletionFatalError(str(exc)) from exc
        return extract_content(body)

    @log_api_call
    def complete(
        self, prompt: PromptSpec, retry_policy: RetryPolicy | None = None
    ) -> Result[CompletionResult]:
        """Request a completion, retrying transient failures per ``retry_policy``."""
        policy = retry_policy or RetryPolicy()
        last_error: CompletionTransientError | None = None

        for attempt in range(1, policy.attempts + 1):
            try:
                text = self._attempt(self.build_payload(prompt))
            except CompletionFatalError as exc:
                return Failure(exc)
            except CompletionTransientError as exc:
                last_error = exc
                logger.warning(
                    "Completion attempt %d/%d failed: %s", attempt, policy.attempts, exc
                )
                if attempt < policy.attempts:
                    self._sleep(policy.delay_seconds)
                continue
            return Success(CompletionResult(raw_text=text, attempts=attempt))

        error = CompletionFatalError(
            f"Completion failed after {policy.attempts} attempts: {last_error}"
        )
        error.__cause__ = last_error
        return Failure(error)
