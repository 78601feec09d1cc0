"""Durable CSV audit log for game events."""

from __future__ import annotations

import csv
import io
import threading
from pathlib import Path
from typing import Optional

from .events import EVENT_LOG_HEADER, GameEvent
from .exceptions import LogWriteError

_PATH_LOCKS: dict[Path, threading.Lock] = {}
_PATH_LOCKS_GUARD = threading.Lock()


class CsvEventRecorder:
    """Append game events to a UTF-8 CSV file, one row per event.

    The file is shared across sessions: the header is written only when the
    destination is missing or empty, and existing rows are never rewritten.
    Recorders pointing at the same file share one lock, so rows from separate
    sessions never interleave.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def record(self, event: GameEvent, /) -> None:
        """Append ``event`` as a single CSV row.

        Nothing is written when the row cannot be encoded.

        Raises:
            LogWriteError: If the row cannot be encoded or the destination
                cannot be created or written.
        """
        with self._lock:
            try:
                line = _format_row(event.to_row())
                # Reject unencodable text before touching the file.
                line.encode("utf-8")
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with self.path.open("a", encoding="utf-8", newline="") as handle:
                    if handle.tell() == 0:
                        handle.write(_format_row(EVENT_LOG_HEADER))
                    handle.write(line)
                    handle.flush()
            except (OSError, ValueError) as exc:
                raise LogWriteError(f"Unable to write event log {self.path}: {exc}") from exc


def read_event_log(path: str | Path, *, case_id: Optional[str] = None) -> list[GameEvent]:
    """Load events back from a CSV audit log, optionally for one case id."""

    source = Path(path)
    with source.open("r", encoding="utf-8", newline="") as handle:
        rows = [row for row in csv.reader(handle) if row]
    if rows and tuple(rows[0]) == EVENT_LOG_HEADER:
        rows = rows[1:]
    events = [GameEvent.from_row(row) for row in rows]
    if case_id is not None:
        events = [event for event in events if event.case_id == case_id]
    return events


def _format_row(values: tuple[str, ...] | list[str]) -> str:
    # One complete line per write call.
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(values)
    return buffer.getvalue()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _PATH_LOCKS_GUARD:
        return _PATH_LOCKS.setdefault(key, threading.Lock())


__all__ = ["CsvEventRecorder", "read_event_log"]
