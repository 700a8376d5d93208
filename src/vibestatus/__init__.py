"""vibestatus — weather-grounded LLM status lines for a static website."""

from vibestatus.completion import CompletionClient, RetryPolicy
from vibestatus.config import Settings
from vibestatus.exceptions import (
    APIError,
    CompletionFatalError,
    CompletionTransientError,
    ConnectionFailedError,
    PublishError,
    RequestTimeoutError,
    ResponseFormatError,
    StatusError,
    TransportError,
    WeatherUnavailableError,
)
from vibestatus.formatter import StatusFormatter
from vibestatus.pipeline import StatusPipeline, generate_status
from vibestatus.prompts import PromptComposer
from vibestatus.publisher import StatusPublisher
from vibestatus.results import Failure, Result, Success
from vibestatus.sanitizer import sanitize
from vibestatus.weather import WeatherClient

__all__ = [
    "APIError",
    "CompletionClient",
    "CompletionFatalError",
    "CompletionTransientError",
    "ConnectionFailedError",
    "Failure",
    "PromptComposer",
    "PublishError",
    "RequestTimeoutError",
    "ResponseFormatError",
    "Result",
    "RetryPolicy",
    "Settings",
    "StatusError",
    "StatusFormatter",
    "StatusPipeline",
    "StatusPublisher",
    "Success",
    "TransportError",
    "WeatherClient",
    "WeatherUnavailableError",
    "generate_status",
    "sanitize",
]

__version__ = "0.1.0"
