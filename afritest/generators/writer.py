"""Writes generated test artifacts to disk."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..logging import get_logger
from ..models import PendingArtifact, WriteReport

logger = get_logger("writer")


class ArtifactWriter:
    """Writes each artifact independently; one failure never stops the batch."""

    def write(self, artifacts: Iterable[PendingArtifact]) -> WriteReport:
        report = WriteReport()
        for artifact in artifacts:
            target = Path(artifact.directory) / artifact.file_name
            # Lone surrogates in model output raise UnicodeEncodeError, a ValueError.
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(artifact.content, encoding="utf-8")
            except (OSError, ValueError) as exc:
                logger.error("Failed to write test file %s: %s", artifact.file_name, exc)
                report.failed.append(str(target))
                continue
            logger.debug("Wrote %s", target)
            report.written.append(str(target))
        return report


__all__ = ["ArtifactWriter"]
