"""Call logging for the outbound clients and pipeline stages."""

from __future__ import annotations

import functools
import logging
import threading
import time
from pathlib import Path
from typing import Any, Callable, TypeVar

from vibestatus.results import Failure

F = TypeVar("F", bound=Callable[..., Any])

LOGGER_NAME = "vibestatus.api"
_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

_LOG_FILE: Path | None = None

_logger: logging.Logger | None = None
_logger_lock = threading.Lock()


def configure_logging(level: int = logging.INFO, log_file: Path | None = None) -> None:
    """Set up console logging and, optionally, a call log file.

    Must run before the first decorated call for ``log_file`` to take effect.
    """
    global _LOG_FILE
    logging.basicConfig(level=level, format=_FORMAT)
    _LOG_FILE = log_file


def _get_logger() -> logging.Logger:
    """Return the call logger, attaching the file handler on first use."""
    global _logger
    if _logger is not None:
        return _logger

    with _logger_lock:
        if _logger is not None:
            return _logger

        _logger = logging.getLogger(LOGGER_NAME)
        _logger.setLevel(logging.DEBUG)

        if _LOG_FILE is not None and not _logger.handlers:
            _LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(_LOG_FILE, encoding="utf-8")
            handler.setFormatter(logging.Formatter(_FORMAT))
            _logger.addHandler(handler)

    return _logger


def _arg_summary(args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    # skip 'self'
    arg_parts = [repr(a) for a in args[1:]]
    arg_parts += [f"{k}={v!r}" for k, v in kwargs.items()]
    return ", ".join(arg_parts)


def log_api_call(fn: F) -> F:
    """Decorator that logs client calls. A returned ``Failure`` is logged as FAIL."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = _get_logger()
        arg_str = _arg_summary(args, kwargs)
        logger.info("CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        if isinstance(result, Failure):
            logger.warning(
                "FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(result.error).__name__, result.error, elapsed,
            )
        else:
            logger.info("OK: %s(%s) (%.3fs)", fn.__qualname__, arg_str, elapsed)
        return result

    return wrapper  # type: ignore[return-value]


def log_service_call(fn: F) -> F:
    """Decorator that logs pipeline-level calls."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = _get_logger()
        logger.info("SERVICE CALL: %s", fn.__qualname__)

        start = time.monotonic()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "SERVICE FAIL: %s -> %s: %s (%.3fs)",
                fn.__qualname__, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        status = "FAIL" if isinstance(result, Failure) else "OK"
        logger.info("SERVICE %s: %s -> %.3fs", status, fn.__qualname__, elapsed)
        return result

    return wrapper  # type: ignore[return-value]
