"""Tests for habit CLI commands."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from habitrack.cli import _select_habits, create_parser, run_cli
from habitrack.config import HabitsConfig
from habitrack.habits import WINDOW_SIZE, HabitRecord


@pytest.fixture
def config(tmp_path: Path) -> HabitsConfig:
    return HabitsConfig(
        habit_file=tmp_path / "habits.json",
        log_dir=tmp_path / "logs",
        color=False,
    )


@pytest.fixture
def habit_file(config: HabitsConfig) -> Path:
    """Write a habit file with two fresh habits."""
    assert config.habit_file is not None
    config.habit_file.write_text(json.dumps([
        HabitRecord(name="Read").to_dict(),
        HabitRecord(name="Run").to_dict(),
    ]))
    return config.habit_file


def run(config: HabitsConfig, *argv: str) -> int:
    with patch("habitrack.cli.load_config", return_value=config):
        return run_cli(list(argv))


def load(path: Path) -> dict[str, dict]:
    return {entry["name"]: entry for entry in json.loads(path.read_text())}


def events(config: HabitsConfig) -> list[dict]:
    assert config.log_dir is not None
    with open(config.log_dir / "events.jsonl") as f:
        return [json.loads(line) for line in f]


class TestParser:
    """Tests for argument parsing."""

    def test_no_command_prints_help(self, capsys):
        assert run_cli([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_input_option(self):
        args = create_parser().parse_args(["-i", "h.json", "update", "Read", "Run"])
        assert args.input == Path("h.json")
        assert args.command == "update"
        assert args.names == ["Read", "Run"]

    def test_update_requires_name(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["update"])


class TestInitCommand:
    """Tests for 'habitrack init'."""

    def test_creates_file(self, config: HabitsConfig, capsys):
        assert run(config, "init") == 0
        assert config.habit_file.read_text() == "[]"
        assert "Created habit file" in capsys.readouterr().out

    def test_existing_file(self, config: HabitsConfig, habit_file: Path, capsys):
        assert run(config, "init") == 0
        assert "already exists" in capsys.readouterr().out
        assert len(load(habit_file)) == 2


class TestCreateCommand:
    """Tests for 'habitrack create'."""

    def test_create(self, config: HabitsConfig, habit_file: Path, capsys):
        assert run(config, "create", "Swim") == 0

        data = load(habit_file)
        assert data["Swim"] == {
            "name": "Swim",
            "executions": [],
            "manual_update": False,
            "archived_executions": [],
        }
        assert "Created habit: Swim" in capsys.readouterr().out
        assert events(config)[0]["event"] == "habit_created"

    def test_create_duplicate(self, config: HabitsConfig, habit_file: Path, capsys):
        assert run(config, "create", "Read", "Swim") == 1

        assert list(load(habit_file)) == ["Read", "Run", "Swim"]
        assert "already exists" in capsys.readouterr().out

    def test_create_without_file(self, config: HabitsConfig, capsys):
        assert run(config, "create", "Swim") == 1
        assert "Could not find input file" in capsys.readouterr().out


class TestUpdateCommand:
    """Tests for 'habitrack update'."""

    def test_marks_done(self, config: HabitsConfig, habit_file: Path, capsys):
        assert run(config, "update", "Read") == 0

        data = load(habit_file)
        assert data["Read"]["executions"] == [1]
        assert data["Read"]["manual_update"] is True
        assert data["Run"]["executions"] == []
        assert "Marked done: Read" in capsys.readouterr().out

    def test_partial_failure_saves_others(self, config: HabitsConfig, habit_file: Path, capsys):
        assert run(config, "update", "Read", "Swim", "Run") == 1

        data = load(habit_file)
        assert data["Read"]["executions"] == [1]
        assert data["Run"]["executions"] == [1]
        assert "Habit 'Swim' not found" in capsys.readouterr().out

        logged = [e["event"] for e in events(config)]
        assert logged.count("habit_update") == 2
        assert logged.count("habit_not_found") == 1

    def test_not_found_leaves_file_unchanged(self, config: HabitsConfig, habit_file: Path):
        before = habit_file.read_bytes()
        assert run(config, "update", "X") == 1
        assert habit_file.read_bytes() == before

    def test_input_option_overrides_config(self, config: HabitsConfig, tmp_path: Path):
        other = tmp_path / "other.json"
        other.write_text(json.dumps([HabitRecord(name="Swim").to_dict()]))

        assert run(config, "-i", str(other), "update", "Swim") == 0
        assert load(other)["Swim"]["executions"] == [1]

    def test_invalid_file(self, config: HabitsConfig, capsys):
        config.habit_file.write_text("not json")
        assert run(config, "update", "Read") == 1
        assert "Invalid JSON" in capsys.readouterr().out
        assert events(config)[-1]["event"] == "error"

    def test_nested_day_value(self, config: HabitsConfig, capsys):
        config.habit_file.write_text(
            '[{"name":"A","executions":[[1]],"manual_update":false,"archived_executions":[]}]'
        )
        before = config.habit_file.read_bytes()

        assert run(config, "mechanical") == 1
        assert "invalid day value" in capsys.readouterr().out
        assert config.habit_file.read_bytes() == before


class TestMechanicalCommand:
    """Tests for 'habitrack mechanical'."""

    def test_records_missed_days(self, config: HabitsConfig, habit_file: Path, capsys):
        assert run(config, "mechanical") == 0

        data = load(habit_file)
        assert data["Read"]["executions"] == [-1]
        assert data["Run"]["executions"] == [-1]
        assert "Recorded 2 missed day(s)" in capsys.readouterr().out

    def test_keeps_manual_mark(self, config: HabitsConfig, habit_file: Path):
        run(config, "update", "Read")
        run(config, "mechanical")
        run(config, "mechanical")

        data = load(habit_file)
        assert data["Read"]["executions"] == [1, -1]
        assert data["Read"]["manual_update"] is False
        assert data["Run"]["executions"] == [-1, -1]

    def test_archives_full_window(self, config: HabitsConfig, capsys):
        window = [1, 1, -1, 0, 0, 0, 0, 1, 1] + [0] * 38 + [1, 1]
        config.habit_file.write_text(json.dumps([
            HabitRecord(name="Test", executions=window).to_dict()
        ]))

        assert run(config, "mechanical") == 0

        data = load(config.habit_file)
        assert data["Test"]["executions"] == [-1]
        assert data["Test"]["archived_executions"] == ["wYAAAAABgA"]
        assert f"Archived {WINDOW_SIZE} days of 'Test'" in capsys.readouterr().out
        assert "habit_archived" in [e["event"] for e in events(config)]


class TestDisplayCommand:
    """Tests for 'habitrack display'."""

    def test_display_named(self, config: HabitsConfig, habit_file: Path, capsys):
        run(config, "update", "Read")
        capsys.readouterr()

        assert run(config, "display", "Read") == 0
        out = capsys.readouterr().out
        assert "|Read           |" in out
        assert " | X . . . . . . | " in out
        assert "Run" not in out

    def test_display_all(self, config: HabitsConfig, habit_file: Path, capsys):
        assert run(config, "display", "--all") == 0
        out = capsys.readouterr().out
        assert "Read" in out
        assert "Run" in out

    def test_display_requires_names(self, config: HabitsConfig, habit_file: Path, capsys):
        assert run(config, "display") == 1
        assert "--all" in capsys.readouterr().out

    def test_display_unknown(self, config: HabitsConfig, habit_file: Path, capsys):
        assert run(config, "display", "Swim") == 1
        assert "Habit 'Swim' not found" in capsys.readouterr().out

    def test_display_color(self, config: HabitsConfig, habit_file: Path, capsys):
        config.color = True
        assert run(config, "display", "Read") == 0
        assert "\033[" in capsys.readouterr().out

    def test_no_color_flag(self, config: HabitsConfig, habit_file: Path, capsys):
        config.color = True
        assert run(config, "--no-color", "display", "Read") == 0
        assert "\033[" not in capsys.readouterr().out


class TestListCommand:
    """Tests for 'habitrack list'."""

    def test_list(self, config: HabitsConfig, habit_file: Path, capsys):
        run(config, "update", "Read")
        capsys.readouterr()

        assert run(config, "list") == 0
        out = capsys.readouterr().out
        assert "Read" in out
        assert f"1/{WINDOW_SIZE}" in out
        assert "marked" in out
        assert "2 habit(s)" in out

    def test_list_empty(self, config: HabitsConfig, capsys):
        config.habit_file.write_text("[]")
        assert run(config, "list") == 0
        assert "No habits found" in capsys.readouterr().out


class TestArchivesCommand:
    """Tests for 'habitrack archives'."""

    def test_archives(self, config: HabitsConfig, capsys):
        config.habit_file.write_text(json.dumps([
            HabitRecord(name="Test", archived_executions=["wYAAAAABgA"]).to_dict()
        ]))
        assert run(config, "archives", "Test") == 0
        out = capsys.readouterr().out
        assert "#1 Test" in out
        assert " | X X O O O O O | " in out

    def test_no_archives(self, config: HabitsConfig, habit_file: Path, capsys):
        assert run(config, "archives", "Read") == 0
        assert "No archived windows" in capsys.readouterr().out

    def test_unknown(self, config: HabitsConfig, habit_file: Path, capsys):
        assert run(config, "archives", "Swim") == 1

    def test_corrupt_token(self, config: HabitsConfig, capsys):
        config.habit_file.write_text(
            '[{"name":"A","executions":[],"manual_update":false,"archived_executions":["A"]}]'
        )
        assert run(config, "archives", "A") == 1
        out = capsys.readouterr().out
        assert out.startswith("Error: ")
        assert "invalid archive token" in out


class TestDeleteCommand:
    """Tests for 'habitrack delete'."""

    def test_delete(self, config: HabitsConfig, habit_file: Path, capsys):
        assert run(config, "delete", "Read") == 0
        assert list(load(habit_file)) == ["Run"]
        assert events(config)[-1]["event"] == "habit_removed"

    def test_delete_unknown(self, config: HabitsConfig, habit_file: Path, capsys):
        before = habit_file.read_bytes()
        assert run(config, "delete", "Swim") == 1
        assert habit_file.read_bytes() == before


def test_select_habits_keeps_request_order():
    habits = [HabitRecord(name="Read"), HabitRecord(name="Run")]
    found, missing = _select_habits(habits, ["Run", "Swim", "Read"])
    assert [h.name for h in found] == ["Run", "Read"]
    assert missing == ["Swim"]
