from __future__ import annotations

import json
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator, Optional

from lexisent.core.events import SentimentResult
from lexisent.core.logger import get_logger
from lexisent.core.timeutils import iso, utcnow

log = get_logger("history")

DEFAULT_MAX_ENTRIES = 10


class ExportError(Exception):
    """Raised when history cannot be exported."""
    pass


@dataclass(frozen=True)
class HistoryEntry:
    text: str
    result: SentimentResult

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "result": self.result.to_dict()}


class AnalysisHistory:
    """Bounded list of past analyses, newest first.

    Adding past capacity evicts the oldest entry. Blank text is never
    recorded.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self.max_entries = max_entries
        self._entries: deque[HistoryEntry] = deque(maxlen=max_entries)

    def add(self, text: str, result: SentimentResult) -> Optional[HistoryEntry]:
        """Record an analysis. Returns None if text is blank."""
        if not text.strip():
            return None
        entry = HistoryEntry(text=text, result=result)
        self._entries.appendleft(entry)
        log.debug(f"History: {len(self._entries)}/{self.max_entries} entries")
        return entry

    def clear(self) -> None:
        self._entries.clear()

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))


def export_document(
    history: AnalysisHistory,
    exported_at: Optional[datetime] = None,
) -> dict[str, Any]:
    """Build the export document: an export date plus every analysis."""
    return {
        "exportDate": iso(exported_at or utcnow()),
        "analyses": [entry.to_dict() for entry in history],
    }


def export_json(history: AnalysisHistory, path: Path | str) -> Path:
    """Write the history export document to path as indented JSON.

    Raises:
        ExportError: if history is empty or the file cannot be written.
    """
    if len(history) == 0:
        raise ExportError("Nothing to export: history is empty")

    path = Path(path)
    document = export_document(history)
    try:
        path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Failed to write {path}: {e}") from e

    log.info(f"Exported {len(history)} analyses to {path}")
    return path
