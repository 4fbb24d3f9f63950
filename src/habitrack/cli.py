"""CLI commands for habit tracking.

Provides subcommands for creating, updating, displaying and deleting
habits stored in a JSON habit file.
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import HabitsConfig, load_config
from .display import render_archives, render_grid
from .habits import (
    WINDOW_SIZE,
    DayValue,
    HabitRecord,
    UpdateResult,
    create_habit,
    find_habit,
    manual_update,
    mechanical_update,
    remove_habit,
)
from .logging import configure_logger, get_logger
from .store import HabitFileError, HabitStore


def _get_store(config: HabitsConfig) -> HabitStore:
    """Create a HabitStore for the configured habit file."""
    assert config.habit_file is not None
    return HabitStore(config.habit_file)


def _report_updates(results: list[UpdateResult], value: int, manual: bool) -> bool:
    """Print and log batch update results. Returns True if all succeeded."""
    logger = get_logger()
    all_ok = True
    for result in results:
        if result.success:
            assert result.outcome is not None
            logger.log_update(result.name, value, manual, result.outcome)
            if result.outcome.archived_token:
                print(f"Archived {WINDOW_SIZE} days of '{result.name}'")
        else:
            all_ok = False
            logger.log_not_found(result.name)
            print(f"Error: {result.error}")
    return all_ok


def cmd_init(args: argparse.Namespace, config: HabitsConfig) -> int:
    """Create an empty habit file."""
    store = _get_store(config)
    if store.init():
        print(f"Created habit file: {store.path}")
    else:
        print(f"Habit file already exists: {store.path}")
    return 0


def cmd_create(args: argparse.Namespace, config: HabitsConfig) -> int:
    """Register new habits."""
    store = _get_store(config)
    habits = store.load()
    logger = get_logger()

    created = 0
    exit_code = 0
    for name in args.names:
        if find_habit(habits, name) is not None:
            print(f"Error: Habit '{name}' already exists.")
            exit_code = 1
            continue
        create_habit(habits, name)
        logger.log_created(name)
        print(f"Created habit: {name}")
        created += 1

    if created:
        store.save(habits)
    return exit_code


def cmd_update(args: argparse.Namespace, config: HabitsConfig) -> int:
    """Mark habits as done for today."""
    store = _get_store(config)
    habits = store.load()

    results = manual_update(habits, args.names)
    all_ok = _report_updates(results, DayValue.DONE, manual=True)

    updated = [r.name for r in results if r.success]
    if updated:
        store.save(habits)
        print(f"✓ Marked done: {', '.join(updated)}")
    return 0 if all_ok else 1


def cmd_mechanical(args: argparse.Namespace, config: HabitsConfig) -> int:
    """Run the scheduled daily pass over all habits."""
    store = _get_store(config)
    habits = store.load()

    results = mechanical_update(habits)
    all_ok = _report_updates(results, DayValue.NOT_DONE, manual=False)
    store.save(habits)

    recorded = sum(1 for r in results if r.outcome and r.outcome.recorded)
    print(f"Recorded {recorded} missed day(s), kept {len(results) - recorded} manual update(s)")
    return 0 if all_ok else 1


def _select_habits(habits: list[HabitRecord], names: list[str]) -> tuple[list[HabitRecord], list[str]]:
    """Pick habits by name, in the order requested. Returns (found, missing)."""
    found = []
    missing = []
    for name in names:
        habit = find_habit(habits, name)
        if habit is None:
            missing.append(name)
        else:
            found.append(habit)
    return found, missing


def cmd_display(args: argparse.Namespace, config: HabitsConfig) -> int:
    """Display the habit grid."""
    if not args.names and not args.all:
        print("Error: Give one or more habit names, or --all.")
        return 1

    habits = _get_store(config).load()
    if args.all:
        selected, missing = habits, []
    else:
        selected, missing = _select_habits(habits, args.names)

    for name in missing:
        print(f"Error: Habit '{name}' not found")

    if not selected:
        print("No habits found.")
        return 1 if missing else 0

    print(render_grid(selected, color=config.color))
    return 1 if missing else 0


def cmd_list(args: argparse.Namespace, config: HabitsConfig) -> int:
    """List all habits."""
    habits = _get_store(config).load()

    if not habits:
        print("No habits found.")
        return 0

    print(f"\n{'Name':<20} {'Days':<8} {'Today':<10} Archived")
    print("-" * 50)

    for habit in habits:
        days = f"{len(habit.executions)}/{WINDOW_SIZE}"
        today = "marked" if habit.manual_update else "pending"
        print(f"{habit.name:<20} {days:<8} {today:<10} {len(habit.archived_executions)}")

    print(f"\nTotal: {len(habits)} habit(s)")
    return 0


def cmd_archives(args: argparse.Namespace, config: HabitsConfig) -> int:
    """Show the archived windows of a habit."""
    habits = _get_store(config).load()

    habit = find_habit(habits, args.name)
    if habit is None:
        print(f"Error: Habit '{args.name}' not found")
        return 1

    if not habit.archived_executions:
        print(f"No archived windows for '{habit.name}'.")
        return 0

    print(render_archives(habit, color=config.color))
    return 0


def cmd_delete(args: argparse.Namespace, config: HabitsConfig) -> int:
    """Delete a habit and its history."""
    store = _get_store(config)
    habits = store.load()

    if not remove_habit(habits, args.name):
        print(f"Error: Habit '{args.name}' not found")
        return 1

    store.save(habits)
    get_logger().log_removed(args.name)
    print(f"Deleted habit: {args.name}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the habit CLI."""
    parser = argparse.ArgumentParser(
        prog="habitrack",
        description="Track daily habits",
    )
    parser.add_argument(
        "-i", "--input",
        type=Path,
        metavar="FILE",
        help="File that stores habit data",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Sub-command help")

    subparsers.add_parser("init", help="Create an empty habit file")

    create_parser = subparsers.add_parser("create", help="Create new habits")
    create_parser.add_argument("names", nargs="+", metavar="NAME", help="Habit names")

    update_parser = subparsers.add_parser("update", help="Mark habits as done today")
    update_parser.add_argument("names", nargs="+", metavar="NAME", help="Habit names")

    subparsers.add_parser(
        "mechanical",
        help="Record a missed day for every habit not marked since the last run",
    )

    display_parser = subparsers.add_parser("display", help="Display the habit grid")
    display_parser.add_argument("names", nargs="*", metavar="NAME", help="Habit names")
    display_parser.add_argument(
        "-a", "--all",
        action="store_true",
        help="Display every habit",
    )

    subparsers.add_parser("list", help="List habits")

    archives_parser = subparsers.add_parser("archives", help="Show archived windows")
    archives_parser.add_argument("name", help="Name of the habit")

    delete_parser = subparsers.add_parser("delete", help="Delete a habit")
    delete_parser.add_argument("name", help="Name of the habit to delete")

    return parser


def run_cli(argv: list[str] | None = None) -> int:
    """Run the CLI with given arguments.

    Args:
        argv: Command-line arguments. Uses sys.argv[1:] if None.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = load_config()
    if args.input is not None:
        config.habit_file = args.input.expanduser()
    if args.no_color:
        config.color = False

    logger = configure_logger(config.log_dir)

    commands = {
        "init": cmd_init,
        "create": cmd_create,
        "update": cmd_update,
        "mechanical": cmd_mechanical,
        "display": cmd_display,
        "list": cmd_list,
        "archives": cmd_archives,
        "delete": cmd_delete,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args, config)
    except HabitFileError as e:
        print(f"Error: {e}")
        logger.log("error", error=str(e), command=args.command)
        return 1


if __name__ == "__main__":
    sys.exit(run_cli())
