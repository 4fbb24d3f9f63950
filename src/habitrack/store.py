"""JSON file storage for habit records."""

import json
import logging
import os
import tempfile
from pathlib import Path

from .habits import HabitRecord

logger = logging.getLogger(__name__)


class HabitFileError(Exception):
    """Raised when the habit file cannot be read, parsed or written."""

    pass


class HabitStore:
    """Whole-file persistence for the habit list.

    The file holds a JSON array of habit objects. Every save rewrites the
    entire file.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the store with a file path.

        Args:
            path: Path to the habit JSON file.
        """
        self.path = Path(path)

    def exists(self) -> bool:
        """Check whether the habit file exists."""
        return self.path.exists()

    def init(self) -> bool:
        """Create an empty habit file if none exists.

        Returns:
            True if a file was created, False if one already existed.
        """
        if self.exists():
            return False
        self.save([])
        return True

    def load(self) -> list[HabitRecord]:
        """Read every habit from the file.

        Raises:
            HabitFileError: If the file is missing, unreadable or malformed.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise HabitFileError(f"Could not find input file: {self.path}") from e
        except json.JSONDecodeError as e:
            raise HabitFileError(f"Invalid JSON in {self.path}: {e}") from e
        except OSError as e:
            raise HabitFileError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, list):
            raise HabitFileError(f"{self.path} must contain a JSON array of habits")

        try:
            habits = [HabitRecord.from_dict(entry) for entry in data]
        except ValueError as e:
            raise HabitFileError(f"Invalid habit in {self.path}: {e}") from e

        logger.debug("Loaded %d habit(s) from %s", len(habits), self.path)
        return habits

    def save(self, habits: list[HabitRecord]) -> None:
        """Replace the file contents with the given habits.

        The data is written to a temporary file in the same directory and
        moved over the existing file.

        Raises:
            HabitFileError: If the file cannot be written.
        """
        payload = json.dumps([habit.to_dict() for habit in habits], separators=(",", ":"))

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise HabitFileError(f"Could not write {self.path}: {e}") from e

        logger.debug("Saved %d habit(s) to %s", len(habits), self.path)
