"""Success/failure result values returned by best-effort stages."""

from __future__ import annotations

from dataclasses import dataclass

from vibestatus.exceptions import StatusError


@dataclass(frozen=True)
class Success[T]:
    """A stage completed and produced ``value``."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """A stage failed; ``error`` says why.

    Usage:
        match client.fetch_current_conditions(lat, lon, tz):
            case Success(value=reading):
                ...
            case Failure(error=err):
                log.warning("weather skipped: %s", err)
    """

    error: StatusError

    @property
    def ok(self) -> bool:
        return False


type Result[T] = Success[T] | Failure
