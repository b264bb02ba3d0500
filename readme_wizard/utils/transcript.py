from __future__ import annotations

import itertools
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class RunRecord(BaseModel):
    """What one README run sent, received and produced."""

    started_at: datetime
    metadata: Dict[str, Any] = Field(default_factory=dict)
    prompt: Optional[str] = None
    response: Optional[str] = None
    output_path: Optional[str] = None
    exit_code: Optional[int] = None


class TranscriptWriter:
    """Collects a :class:`RunRecord` and writes it as JSON once the run ends.

    Records land in ``<base_dir>/<YYYY-MM-DD>/<HHMMSS>.json``; a numeric suffix
    is added when two runs start in the same second.
    """

    def __init__(
        self,
        *,
        base_dir: Path | str,
        metadata: Dict[str, Any],
        timestamp: Optional[datetime] = None,
    ) -> None:
        self._base_dir = Path(base_dir)
        self._path: Optional[Path] = None
        self.record = RunRecord(started_at=timestamp or datetime.now(), metadata=metadata)

    @property
    def path(self) -> Optional[Path]:
        """Location of the written record, or None before :meth:`finish`."""
        return self._path

    def log_prompt(self, text: str) -> None:
        self.record.prompt = text

    def log_response(self, text: str) -> None:
        self.record.response = text

    def finish(self, exit_code: int, output_path: Optional[Path] = None) -> Path:
        if self._path is not None:
            return self._path
        self.record.exit_code = exit_code
        if output_path is not None:
            self.record.output_path = str(output_path)
        self._path = self._write(self.record.model_dump_json(indent=2))
        return self._path

    def _write(self, payload: str) -> Path:
        started_at = self.record.started_at
        day_dir = self._base_dir / started_at.strftime("%Y-%m-%d")
        day_dir.mkdir(parents=True, exist_ok=True)
        stem = started_at.strftime("%H%M%S")
        for attempt in itertools.count():
            candidate = day_dir / (f"{stem}.json" if attempt == 0 else f"{stem}-{attempt}.json")
            try:
                with candidate.open("x", encoding="utf-8") as handle:
                    handle.write(payload + "\n")
            except FileExistsError:
                continue
            return candidate
