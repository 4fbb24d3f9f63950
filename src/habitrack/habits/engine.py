"""Applies a day's result to a habit record.

The manual_update flag reconciles user and scheduled updates:

1. The scheduled pass records -1 with manual_update=False.
2. A user update records 1 and sets manual_update=True.
3. The next scheduled pass sees the flag, records nothing and clears it,
   so the user's mark for that day is kept.

The flag only reflects the most recent update. It carries no date.
"""

import logging
from dataclasses import dataclass

from .archive import archive_window
from .models import HabitRecord

logger = logging.getLogger(__name__)


@dataclass
class UpdateOutcome:
    """What a single update did to a record."""

    recorded: bool
    archived_token: str | None = None


def archive_executions(habit: HabitRecord) -> str:
    """Move the full window into the archive and start an empty one.

    Returns:
        The archive token appended to habit.archived_executions.
    """
    token = archive_window(habit.executions)
    habit.archived_executions.append(token)
    habit.executions = []
    logger.debug("Archived window of %s as %s", habit.name, token)
    return token


def apply_update(habit: HabitRecord, value: int, is_manual: bool) -> UpdateOutcome:
    """Record a day value on a habit.

    A full window is archived first. The value is then appended unless the
    previous update was manual, and the flag is set to is_manual.

    Args:
        habit: Record to update in place.
        value: Day value (-1, 0 or 1).
        is_manual: True for a user update, False for the scheduled pass.

    Returns:
        UpdateOutcome describing whether the value was recorded and the
        token of any window archived along the way.
    """
    token = None
    if habit.is_window_full:
        token = archive_executions(habit)

    recorded = not habit.manual_update
    if recorded:
        habit.executions.append(int(value))

    habit.manual_update = is_manual
    return UpdateOutcome(recorded=recorded, archived_token=token)
