"""Writes the status document for the static site."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path

from vibestatus.exceptions import PublishError
from vibestatus.models.status import StatusRecord
from vibestatus.results import Failure, Result, Success

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "🪩 Hunter appears okay — vibes intact."
PUBLISHED_MODE = 0o644


def fallback_record(now: datetime | None = None) -> StatusRecord:
    """The hardcoded safe record published when generation fails."""
    return StatusRecord(message=FALLBACK_MESSAGE, updated_at=now or datetime.now(UTC))


def published_mode() -> int:
    """``PUBLISHED_MODE`` under the process umask, as a plain ``open`` would give."""
    umask = os.umask(0)
    os.umask(umask)
    return PUBLISHED_MODE & ~umask


def render(record: StatusRecord) -> str:
    """Serialize a record exactly as it is written to disk."""
    return json.dumps(record.to_document(), indent=2, ensure_ascii=False) + "\n"


class StatusPublisher:
    """Overwrites one JSON file per run. Last write wins."""

    def __init__(self, output_path: Path) -> None:
        self.output_path = Path(output_path)

    def publish(self, record: StatusRecord) -> Result[Path]:
        """Write ``record``, replacing the previous document in one rename."""
        target = self.output_path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(render(record))
                # mkstemp files are owner-only
                os.chmod(tmp_name, published_mode())
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            error = PublishError(f"Could not write {target}: {exc}")
            error.__cause__ = exc
            logger.error("%s", error)
            return Failure(error)

        logger.info("Wrote %s", target)
        return Success(target)

    def publish_fallback(self) -> Result[Path]:
        """Publish the fixed fallback record with a fresh timestamp."""
        return self.publish(fallback_record())
