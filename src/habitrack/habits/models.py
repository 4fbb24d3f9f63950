"""Data models for habit tracking."""

import base64
import binascii
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

WINDOW_SIZE = 49
ARCHIVE_BYTES = (WINDOW_SIZE + 7) // 8


class DayValue(IntEnum):
    """Value recorded for a single day."""

    NOT_DONE = -1
    UNSET = 0
    DONE = 1


VALID_DAY_VALUES = frozenset(int(v) for v in DayValue)


@dataclass(eq=False)
class HabitRecord:
    """A habit and its execution history.

    Attributes:
        name: Unique habit name, used as the lookup key.
        executions: Rolling window of day values, at most WINDOW_SIZE long.
        manual_update: True if the last update came from the user, which
            suppresses the next mechanical update.
        archived_executions: Encoded tokens of past full windows, oldest first.
    """

    name: str
    executions: list[int] = field(default_factory=list)
    manual_update: bool = False
    archived_executions: list[str] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        """Records are the same habit when their names match."""
        if not isinstance(other, HabitRecord):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    @property
    def is_window_full(self) -> bool:
        """True once the rolling window holds WINDOW_SIZE days."""
        return len(self.executions) >= WINDOW_SIZE

    def to_dict(self) -> dict[str, Any]:
        """Convert to the storage representation."""
        return {
            "name": self.name,
            "executions": [int(v) for v in self.executions],
            "manual_update": self.manual_update,
            "archived_executions": list(self.archived_executions),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HabitRecord":
        """Build a record from its storage representation.

        Raises:
            ValueError: If a field is missing or has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Habit entry must be an object, got {type(data).__name__}")

        missing = [
            key
            for key in ("name", "executions", "manual_update", "archived_executions")
            if key not in data
        ]
        if missing:
            raise ValueError(f"Habit entry missing field(s): {', '.join(missing)}")

        name = data["name"]
        if not isinstance(name, str):
            raise ValueError("Habit name must be a string")

        executions = data["executions"]
        if not isinstance(executions, list):
            raise ValueError(f"Habit '{name}': executions must be a list")
        for value in executions:
            # bool is an int subclass, reject it explicitly
            if (
                not isinstance(value, int)
                or isinstance(value, bool)
                or value not in VALID_DAY_VALUES
            ):
                raise ValueError(f"Habit '{name}': invalid day value {value!r}")
        if len(executions) > WINDOW_SIZE:
            raise ValueError(
                f"Habit '{name}': {len(executions)} executions exceeds window of {WINDOW_SIZE}"
            )

        manual_update = data["manual_update"]
        if not isinstance(manual_update, bool):
            raise ValueError(f"Habit '{name}': manual_update must be a boolean")

        archived = data["archived_executions"]
        if not isinstance(archived, list) or not all(isinstance(t, str) for t in archived):
            raise ValueError(f"Habit '{name}': archived_executions must be a list of strings")
        for token in archived:
            if not _is_archive_token(token):
                raise ValueError(f"Habit '{name}': invalid archive token {token!r}")

        return cls(
            name=name,
            executions=list(executions),
            manual_update=manual_update,
            archived_executions=list(archived),
        )


def _is_archive_token(token: str) -> bool:
    """Check that a token decodes to one packed window."""
    padding = "=" * (-len(token) % 4)
    try:
        packed = base64.b64decode(token + padding, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError):
        return False
    return len(packed) == ARCHIVE_BYTES
