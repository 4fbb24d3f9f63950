"""JSONL event log of habit changes."""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .habits import UpdateOutcome


@dataclass
class LogEntry:
    """A single log entry."""

    timestamp: str
    event: str
    habit: str | None = None
    value: int | None = None
    manual: bool | None = None
    recorded: bool | None = None
    token: str | None = None
    error: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict, excluding None values."""
        data = asdict(self)
        return {k: v for k, v in data.items() if v is not None and v != {} and v != []}


class JSONLLogger:
    """Logger that writes structured logs in JSONL format."""

    def __init__(
        self,
        log_dir: str | Path | None = None,
        filename: str = "events.jsonl",
        max_size_mb: float = 10.0,
    ) -> None:
        if log_dir is None:
            log_dir = Path.home() / ".habitrack" / "logs"
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.filename = filename
        self.max_size_bytes = int(max_size_mb * 1024 * 1024)

    @property
    def log_path(self) -> Path:
        """Current log file path."""
        return self.log_dir / self.filename

    def _rotate_if_needed(self) -> None:
        """Rotate log file if it exceeds max size."""
        if not self.log_path.exists():
            return

        if self.log_path.stat().st_size >= self.max_size_bytes:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
            rotated_name = f"{self.log_path.stem}_{timestamp}.jsonl"
            self.log_path.rename(self.log_dir / rotated_name)

    def _write(self, entry: LogEntry) -> None:
        """Write a log entry to the file."""
        self._rotate_if_needed()

        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry.to_dict(), ensure_ascii=False) + "\n")

    def log(
        self,
        event: str,
        *,
        habit: str | None = None,
        value: int | None = None,
        manual: bool | None = None,
        recorded: bool | None = None,
        token: str | None = None,
        error: str | None = None,
        **extra: Any,
    ) -> None:
        """Log an event."""
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            event=event,
            habit=habit,
            value=int(value) if value is not None else None,
            manual=manual,
            recorded=recorded,
            token=token,
            error=error,
            extra=extra if extra else {},
        )
        self._write(entry)

    def log_update(
        self,
        habit: str,
        value: int,
        manual: bool,
        outcome: UpdateOutcome,
    ) -> None:
        """Log an applied update, and the archived window if there was one."""
        if outcome.archived_token is not None:
            self.log("habit_archived", habit=habit, token=outcome.archived_token)
        self.log(
            "habit_update",
            habit=habit,
            value=value,
            manual=manual,
            recorded=outcome.recorded,
        )

    def log_not_found(self, habit: str) -> None:
        """Log an update for a habit that does not exist."""
        self.log("habit_not_found", habit=habit, error=f"Habit '{habit}' not found")

    def log_created(self, habit: str) -> None:
        """Log a newly created habit."""
        self.log("habit_created", habit=habit)

    def log_removed(self, habit: str) -> None:
        """Log a deleted habit."""
        self.log("habit_removed", habit=habit)


# Global logger instance
_logger: JSONLLogger | None = None


def get_logger() -> JSONLLogger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = JSONLLogger()
    return _logger


def configure_logger(log_dir: str | Path | None = None, max_size_mb: float = 10.0) -> JSONLLogger:
    """Configure and return the global logger."""
    global _logger
    _logger = JSONLLogger(log_dir=log_dir, max_size_mb=max_size_mb)
    return _logger
