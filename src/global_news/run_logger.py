"""Run logger for recording fetch cycles of a session to JSON files."""

import dataclasses
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from global_news.data import NewsRequest


class FetchRecord(BaseModel):
    """Record of a single fetch cycle."""

    generation: int
    mode: str
    country: str
    query: str
    primary_count: int | None = None
    fallback_used: bool = False
    fallback_count: int | None = None
    error: str = ""
    committed: bool = True
    timestamp: str = ""
    duration_seconds: float = 0.0


class SessionRecord(BaseModel):
    """Record of a complete CLI session."""

    session_id: str
    initial_country: str
    started_at: str
    completed_at: str | None = None
    fetches: list[FetchRecord] = []
    final_article_count: int = 0
    total_usage: dict[str, Any] | None = None


def _serialize(obj: Any) -> Any:
    """Serialize an object to JSON-compatible format.

    Handles dataclasses, Pydantic models, lists, dicts, and primitives.
    """
    if obj is None:
        return None
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, BaseModel):
        return obj.model_dump()
    if isinstance(obj, list):
        return [_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    if isinstance(obj, Path):
        return str(obj)
    return obj


class RunLogger:
    """Accumulates fetch records and writes a JSON log file per session.

    When ``enabled=False``, all methods are no-ops.

    Args:
        log_dir: Directory to write JSON log files.
        enabled: If False, all methods become no-ops.
    """

    def __init__(self, log_dir: Path, *, enabled: bool = True) -> None:
        self._log_dir = log_dir
        self._enabled = enabled
        self._record: SessionRecord | None = None
        self._last_log_path: Path | None = None

    @property
    def enabled(self) -> bool:
        """Whether logging is active."""
        return self._enabled

    @property
    def last_log_path(self) -> Path | None:
        """Path to the last written log file, or None."""
        return self._last_log_path

    @property
    def record(self) -> SessionRecord | None:
        return self._record

    def start_session(self, country: str) -> None:
        """Initialize a new session record.

        Args:
            country: Country selected when the session starts.
        """
        if not self._enabled:
            return

        self._record = SessionRecord(
            session_id=str(uuid.uuid4()),
            initial_country=country,
            started_at=datetime.now(tz=UTC).isoformat(),
        )

    def log_fetch(
        self,
        generation: int,
        request: NewsRequest,
        *,
        country: str,
        primary_count: int | None,
        fallback_count: int | None,
        error: str,
        committed: bool,
        duration_seconds: float,
    ) -> None:
        """Append a fetch record to the current session.

        Args:
            generation: Generation number of the fetch.
            request: Primary request that was issued.
            country: Country selected when the fetch was invoked.
            primary_count: Articles from the primary request (None if it failed).
            fallback_count: Articles from the fallback (None if not issued or failed).
            error: Error text produced by the cycle.
            committed: Whether the outcome was applied to the state.
            duration_seconds: Wall-clock time for the cycle.
        """
        if not self._enabled or self._record is None:
            return

        self._record.fetches.append(
            FetchRecord(
                generation=generation,
                mode=request.mode.value,
                country=country,
                query=request.query or "",
                primary_count=primary_count,
                fallback_used=primary_count == 0,
                fallback_count=fallback_count,
                error=error,
                committed=committed,
                timestamp=datetime.now(tz=UTC).isoformat(),
                duration_seconds=round(duration_seconds, 4),
            )
        )

    def finish_session(self, article_count: int, usage: Any) -> Path | None:
        """Write the session record to a JSON file.

        Args:
            article_count: Number of articles in the final state.
            usage: Total accumulated usage.

        Returns:
            Path to the written JSON file, or None if logging is disabled.
        """
        if not self._enabled or self._record is None:
            return None

        self._record.completed_at = datetime.now(tz=UTC).isoformat()
        self._record.final_article_count = article_count
        self._record.total_usage = _serialize(usage)

        self._log_dir.mkdir(parents=True, exist_ok=True)

        # session_2026-02-12T14-30-00.json
        ts = self._record.started_at.replace(":", "-")
        ts = ts.split(".")[0].split("+")[0]
        filepath = self._log_dir / f"session_{ts}.json"

        filepath.write_text(self._record.model_dump_json(indent=2))
        self._last_log_path = filepath
        return filepath
