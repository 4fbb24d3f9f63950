"""Configuration loader.

Loads settings from ~/.habitrack/config.json and applies environment
variable overrides on top.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".habitrack" / "config.json"
DEFAULT_HABIT_FILE = Path.home() / ".habitrack" / "habits.json"
DEFAULT_LOG_DIR = Path.home() / ".habitrack" / "logs"


@dataclass
class HabitsConfig:
    """Runtime configuration.

    Attributes:
        habit_file: JSON file holding the habit list.
        log_dir: Directory for the JSONL event log.
        color: Whether the grid display uses ANSI colors.
    """

    habit_file: Path | None = None
    log_dir: Path | None = None
    color: bool = True

    def __post_init__(self) -> None:
        if self.habit_file is None:
            self.habit_file = DEFAULT_HABIT_FILE
        if self.log_dir is None:
            self.log_dir = DEFAULT_LOG_DIR


def load_config(config_path: Path | None = None) -> HabitsConfig:
    """Load HabitsConfig from a JSON file and the environment.

    The config file should have this structure:
    ```json
    {
      "habits": {
        "file": "~/Dropbox/habits.json",
        "log_dir": "~/.habitrack/logs",
        "color": true
      }
    }
    ```

    HABITRACK_FILE and HABITRACK_LOG_DIR override the file values, and
    NO_COLOR (any value) disables color.

    Args:
        config_path: Path to config file. Uses DEFAULT_CONFIG_PATH if None.

    Returns:
        HabitsConfig instance with loaded values.
    """
    path = config_path or DEFAULT_CONFIG_PATH

    config = HabitsConfig()
    if not path.exists():
        logger.debug("No config file at %s, using defaults", path)
    else:
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Invalid JSON in %s: %s. Using defaults.", path, e)
        except OSError as e:
            logger.warning("Cannot read %s: %s. Using defaults.", path, e)
        else:
            config = _parse_config(data)

    return _apply_env(config)


def _parse_config(data: dict[str, Any]) -> HabitsConfig:
    """Parse config dictionary into HabitsConfig."""
    habits_data = data.get("habits", {}) if isinstance(data, dict) else {}
    if not isinstance(habits_data, dict):
        habits_data = {}

    habit_file: Path | None = None
    raw_file = habits_data.get("file")
    if isinstance(raw_file, str) and raw_file:
        habit_file = Path(raw_file).expanduser()

    log_dir: Path | None = None
    raw_log_dir = habits_data.get("log_dir")
    if isinstance(raw_log_dir, str) and raw_log_dir:
        log_dir = Path(raw_log_dir).expanduser()

    color = habits_data.get("color", True)
    if not isinstance(color, bool):
        color = True

    return HabitsConfig(habit_file=habit_file, log_dir=log_dir, color=color)


def _apply_env(config: HabitsConfig) -> HabitsConfig:
    """Override config values from environment variables."""
    habit_file = os.getenv("HABITRACK_FILE")
    if habit_file:
        config.habit_file = Path(habit_file).expanduser()

    log_dir = os.getenv("HABITRACK_LOG_DIR")
    if log_dir:
        config.log_dir = Path(log_dir).expanduser()

    if os.getenv("NO_COLOR") is not None:
        config.color = False

    return config


def save_config(config: HabitsConfig, config_path: Path | None = None) -> None:
    """Save HabitsConfig to a JSON file.

    Only values that differ from the defaults are written.

    Args:
        config: The config to save.
        config_path: Path to write to. Uses DEFAULT_CONFIG_PATH if None.
    """
    path = config_path or DEFAULT_CONFIG_PATH

    path.parent.mkdir(parents=True, exist_ok=True)

    habits_data: dict[str, Any] = {}

    if config.habit_file and config.habit_file != DEFAULT_HABIT_FILE:
        habits_data["file"] = str(config.habit_file)

    if config.log_dir and config.log_dir != DEFAULT_LOG_DIR:
        habits_data["log_dir"] = str(config.log_dir)

    if not config.color:
        habits_data["color"] = False

    data: dict[str, Any] = {}
    if habits_data:
        data["habits"] = habits_data

    try:
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        raise
