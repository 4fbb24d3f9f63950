"""Habit execution tracking and archival."""

from .archive import archive_bitmap, archive_window, decode_archive, pack_window
from .collection import (
    HabitNotFoundError,
    UpdateResult,
    create_habit,
    find_habit,
    manual_update,
    mechanical_update,
    remove_habit,
    update_many,
    update_named,
)
from .engine import UpdateOutcome, apply_update, archive_executions
from .models import WINDOW_SIZE, DayValue, HabitRecord

__all__ = [
    "DayValue",
    "HabitNotFoundError",
    "HabitRecord",
    "UpdateOutcome",
    "UpdateResult",
    "WINDOW_SIZE",
    "apply_update",
    "archive_bitmap",
    "archive_executions",
    "archive_window",
    "create_habit",
    "decode_archive",
    "find_habit",
    "manual_update",
    "mechanical_update",
    "pack_window",
    "remove_habit",
    "update_many",
    "update_named",
]
