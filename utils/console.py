"""
utils/console.py
----------------
Keyboard input and table output for the interactive menus.
Every prompt goes through here so tests can feed ``input``.
"""

from typing import Iterable, Sequence

from tabulate import tabulate

GREETING = (
    "\n\n*******************************************************\n"
    "              User Interface                           \n"
    "*******************************************************\n"
)


def read_line(prompt: str) -> str:
    """Read one stripped line. EOFError propagates so the caller can quit."""
    return input(prompt).strip()


def read_choice() -> int:
    """Read a menu number, asking again until the input is an integer."""
    while True:
        try:
            return int(read_line("Please make your choice: "))
        except ValueError:
            print("Your input is invalid!")


def read_int(prompt: str) -> int:
    while True:
        try:
            return int(read_line(prompt))
        except ValueError:
            print("Please enter a whole number.")


def read_float(prompt: str) -> float:
    while True:
        try:
            return float(read_line(prompt))
        except ValueError:
            print("Please enter a number.")


def read_yes_no(prompt: str) -> bool:
    """Ask a yes/no question until the answer is one of yes, no, y, n."""
    while True:
        answer = read_line(prompt).lower()
        if answer in ("yes", "y"):
            return True
        if answer in ("no", "n"):
            return False
        print("Invalid input")


def print_menu(title: str, options: Iterable[tuple[int, str]]) -> None:
    """Print a numbered menu under an underlined title."""
    print(title)
    print("-" * len(title))
    for number, label in options:
        print(f"{number}. {label}")


def print_table(rows: Sequence[Sequence], headers: Sequence[str]) -> int:
    """
    Render rows as a table.

    Returns:
        The number of rows printed.
    """
    if not rows:
        print("No results.")
        return 0
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return len(rows)
