"""Run configuration, passed explicitly into each component."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

# Wilmington, DE
DEFAULT_LATITUDE = 39.739
DEFAULT_LONGITUDE = -75.539
DEFAULT_TIMEZONE = "America/New_York"
DEFAULT_LOCATION_NAME = "Wilmington, DE"
DEFAULT_SUBJECT = "Hunter"
DEFAULT_MODEL = "gpt-4o-mini"
STATUS_FILENAME = "status.json"

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Everything a pipeline run needs to know about its environment."""

    model_config = ConfigDict(frozen=True)

    openai_api_key: str | None = None
    latitude: float = DEFAULT_LATITUDE
    longitude: float = DEFAULT_LONGITUDE
    timezone: str = DEFAULT_TIMEZONE
    location_name: str = DEFAULT_LOCATION_NAME
    subject: str = DEFAULT_SUBJECT
    model: str = DEFAULT_MODEL
    structured: bool = False
    output_path: Path | None = None
    timeout: float = 15.0

    @property
    def has_api_key(self) -> bool:
        return bool(self.openai_api_key and self.openai_api_key.strip())

    @classmethod
    def from_env(cls, environ: Mapping[str, str], **overrides: object) -> Settings:
        """Build settings from an environment mapping.

        Args:
            environ: Usually ``os.environ``; tests pass a plain dict.
            **overrides: Values that win over the environment (CLI options).
        """
        values: dict[str, object] = {
            "openai_api_key": environ.get("OPENAI_API_KEY") or None,
            "latitude": _coordinate(environ.get("STATUS_LAT"), DEFAULT_LATITUDE, 90.0),
            "longitude": _coordinate(environ.get("STATUS_LON"), DEFAULT_LONGITUDE, 180.0),
        }
        if environ.get("STATUS_TIMEZONE"):
            values["timezone"] = environ["STATUS_TIMEZONE"]
        if environ.get("OPENAI_MODEL"):
            values["model"] = environ["OPENAI_MODEL"]
        if environ.get("STATUS_STRUCTURED"):
            values["structured"] = environ["STATUS_STRUCTURED"].strip().lower() in _TRUTHY
        if environ.get("STATUS_OUTPUT"):
            values["output_path"] = Path(environ["STATUS_OUTPUT"])
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)

    def resolve_output_path(self, root: Path) -> Path:
        """Where status.json goes: explicit path, else ``root/public`` if present, else ``root``."""
        if self.output_path is not None:
            return self.output_path
        public_dir = root / "public"
        if public_dir.is_dir():
            return public_dir / STATUS_FILENAME
        return root / STATUS_FILENAME


def _coordinate(raw: str | None, default: float, limit: float) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring unparseable coordinate %r; using %s", raw, default)
        return default
    if not math.isfinite(value) or abs(value) > limit:
        logger.warning("Ignoring out-of-range coordinate %r; using %s", raw, default)
        return default
    return value
