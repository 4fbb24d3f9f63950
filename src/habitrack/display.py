"""Terminal grid display of habit windows.

Habits are shown side by side, one column block per habit, seven days per
row:

     |Meditation     |  |Coding         |
     | X X X X X X O |  | X O X X X X X |
     | X X T . . . . |  | X X X X X X X |
"""

from enum import Enum

from .habits import WINDOW_SIZE, DayValue, HabitRecord, archive_bitmap

DAYS_PER_ROW = 7
NAME_WIDTH = 15

RESET = "\033[0m"


class Symbol(Enum):
    """Display state of one day in the grid."""

    DONE = "done"
    NOT_DONE = "not_done"
    TODAY = "today"
    UNFILLED = "unfilled"


SYMBOL_STYLES: dict[Symbol, tuple[str, str]] = {
    Symbol.DONE: ("X", "\033[32m"),         # green
    Symbol.NOT_DONE: ("O", "\033[31m"),     # red
    Symbol.TODAY: ("T", "\033[38;5;208m"),  # orange
    Symbol.UNFILLED: (".", "\033[34m"),     # blue
}


def display_symbols(habit: HabitRecord) -> list[Symbol]:
    """Map a habit's window to WINDOW_SIZE display symbols.

    Recorded days show as done or not done. The first empty slot is
    today's, unless the user already marked today manually; the rest are
    unfilled.
    """
    symbols = []
    show_today = not habit.manual_update
    for index in range(WINDOW_SIZE):
        if index < len(habit.executions):
            if habit.executions[index] == DayValue.DONE:
                symbols.append(Symbol.DONE)
            else:
                symbols.append(Symbol.NOT_DONE)
        elif show_today:
            symbols.append(Symbol.TODAY)
            show_today = False
        else:
            symbols.append(Symbol.UNFILLED)
    return symbols


def archive_symbols(token: str) -> list[Symbol]:
    """Map an archived window to done / not-done symbols."""
    return [Symbol.DONE if done else Symbol.NOT_DONE for done in archive_bitmap(token)]


def format_symbol(symbol: Symbol, color: bool = True) -> str:
    """Render one symbol as a character, optionally colored."""
    char, code = SYMBOL_STYLES[symbol]
    if not color:
        return char
    return f"{code}{char}{RESET}"


def render_columns(
    titles: list[str],
    columns: list[list[Symbol]],
    color: bool = True,
) -> str:
    """Render symbol columns side by side under their titles."""
    header = "".join(f" |{title[:NAME_WIDTH]:<{NAME_WIDTH}}| " for title in titles)
    lines = [header]

    rows = WINDOW_SIZE // DAYS_PER_ROW
    for row in range(rows):
        start = row * DAYS_PER_ROW
        line = ""
        for symbols in columns:
            cells = symbols[start:start + DAYS_PER_ROW]
            line += " |" + "".join(" " + format_symbol(s, color) for s in cells) + " | "
        lines.append(line)

    return "\n".join(lines)


def render_grid(habits: list[HabitRecord], color: bool = True) -> str:
    """Render the current window of each habit as a grid."""
    return render_columns(
        [habit.name for habit in habits],
        [display_symbols(habit) for habit in habits],
        color=color,
    )


def render_archives(habit: HabitRecord, color: bool = True) -> str:
    """Render every archived window of a habit, oldest first."""
    tokens = habit.archived_executions
    titles = [f"#{i + 1} {habit.name}" for i in range(len(tokens))]
    return render_columns(titles, [archive_symbols(t) for t in tokens], color=color)
