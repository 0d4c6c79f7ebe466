"""Per-category, per-day artifact persistence."""

import json
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import structlog

from observability import metrics
from tasks.models import CategoryArtifact

logger = structlog.get_logger()

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_CATEGORY_RE = re.compile(r"^[\w-]+$")


class ArtifactStoreError(Exception):
    """Artifact could not be written."""


class ArtifactStore(ABC):
    """Key-value store of CategoryArtifacts keyed by (category, date)."""

    @abstractmethod
    def save(self, artifact: CategoryArtifact) -> None:
        ...

    @abstractmethod
    def get(self, category: str, date: str) -> Optional[CategoryArtifact]:
        ...

    @abstractmethod
    def list_by_date(self, date: str) -> list[CategoryArtifact]:
        """All artifacts for a date. A missing category is simply absent."""
        ...


class JsonArtifactStore(ArtifactStore):
    """One ``<category>-<YYYY-MM-DD>.json`` file per artifact."""

    def __init__(self, path: Path):
        self.dir = Path(path).expanduser()
        self.dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, category: str, date: str) -> Path:
        if not _CATEGORY_RE.match(category):
            raise ArtifactStoreError(f"Invalid category name: {category!r}")
        if not _DATE_RE.match(date):
            raise ArtifactStoreError(f"Invalid artifact date: {date!r}")
        return self.dir / f"{category}-{date}.json"

    def save(self, artifact: CategoryArtifact) -> None:
        """Write atomically so readers never see a partial file."""
        path = self._path_for(artifact.category, artifact.date)
        payload = json.dumps(artifact.to_dict(), ensure_ascii=False, indent=2)
        tmp = None
        try:
            fd, tmp = tempfile.mkstemp(dir=self.dir, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp, path)
        except OSError as e:
            if tmp is not None:
                Path(tmp).unlink(missing_ok=True)
            raise ArtifactStoreError(f"Failed to write {path.name}: {e}") from e
        metrics.counter("artifacts_saved")
        logger.info("artifact_saved", file=path.name, tasks=len(artifact.tasks), error=artifact.error)

    def get(self, category: str, date: str) -> Optional[CategoryArtifact]:
        path = self._path_for(category, date)
        if not path.exists():
            return None
        return self._read(path)

    def list_by_date(self, date: str) -> list[CategoryArtifact]:
        if not _DATE_RE.match(date):
            raise ArtifactStoreError(f"Invalid artifact date: {date!r}")
        artifacts = []
        for path in sorted(self.dir.glob(f"*-{date}.json")):
            artifact = self._read(path)
            if artifact is not None:
                artifacts.append(artifact)
        return artifacts

    def _read(self, path: Path) -> Optional[CategoryArtifact]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("artifact_unreadable", file=path.name, error=str(e))
            return None
        return CategoryArtifact.from_dict(data)
