"""Operations over the full list of habit records."""

from collections.abc import Iterable
from dataclasses import dataclass

from .engine import UpdateOutcome, apply_update
from .models import DayValue, HabitRecord


class HabitNotFoundError(LookupError):
    """Raised when no habit has the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Habit '{name}' not found")
        self.name = name


@dataclass
class UpdateResult:
    """Result of updating one named habit in a batch."""

    name: str
    success: bool
    outcome: UpdateOutcome | None = None
    error: HabitNotFoundError | None = None


def find_habit(habits: list[HabitRecord], name: str) -> HabitRecord | None:
    """Return the first habit with exactly this name, or None."""
    for habit in habits:
        if habit.name == name:
            return habit
    return None


def update_named(
    habits: list[HabitRecord],
    name: str,
    value: int,
    is_manual: bool,
) -> str:
    """Apply an update to the habit with the given name.

    Returns:
        The matched habit name.

    Raises:
        HabitNotFoundError: If no habit has that name. The list is untouched.
    """
    return _update_named(habits, name, value, is_manual)[0]


def _update_named(
    habits: list[HabitRecord],
    name: str,
    value: int,
    is_manual: bool,
) -> tuple[str, UpdateOutcome]:
    habit = find_habit(habits, name)
    if habit is None:
        raise HabitNotFoundError(name)
    return habit.name, apply_update(habit, value, is_manual)


def update_many(
    habits: list[HabitRecord],
    names: Iterable[str],
    value: int,
    is_manual: bool,
) -> list[UpdateResult]:
    """Update each named habit independently.

    A missing name produces a failed result and does not stop the others.
    """
    results = []
    for name in names:
        try:
            matched, outcome = _update_named(habits, name, value, is_manual)
        except HabitNotFoundError as e:
            results.append(UpdateResult(name=name, success=False, error=e))
            continue
        results.append(UpdateResult(name=matched, success=True, outcome=outcome))
    return results


def manual_update(habits: list[HabitRecord], names: Iterable[str]) -> list[UpdateResult]:
    """Mark the named habits done for today."""
    return update_many(habits, names, DayValue.DONE, is_manual=True)


def mechanical_update(habits: list[HabitRecord]) -> list[UpdateResult]:
    """Run the scheduled daily pass over every habit.

    Habits the user already marked since the last pass keep that mark;
    all others record a "not done" day.
    """
    names = [habit.name for habit in habits]
    return update_many(habits, names, DayValue.NOT_DONE, is_manual=False)


def create_habit(habits: list[HabitRecord], name: str) -> HabitRecord:
    """Append a new, empty habit.

    No uniqueness check is made; callers avoid duplicate names.
    """
    habit = HabitRecord(name=name)
    habits.append(habit)
    return habit


def remove_habit(habits: list[HabitRecord], name: str) -> bool:
    """Remove the first habit with this name. Returns False if none matched."""
    habit = find_habit(habits, name)
    if habit is None:
        return False
    habits.remove(habit)
    return True
