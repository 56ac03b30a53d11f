"""Terminal prompts used by the login session.

Numeric menus share one rule: input that is not a number ends the program.
What happens on a number outside the menu depends on the prompt and is chosen
explicitly with OutOfRange.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

import typer

from cognito_login.exceptions import InvalidSelectionError

CHOICE_PROMPT = "Enter the number of your choice"


class OutOfRange(Enum):
    """What a numeric menu does with a number outside its options."""

    REPROMPT = "reprompt"
    ABORT = "abort"


def ask(prompt: str) -> str:
    """Read one line of input, stripped. Empty input is allowed."""
    return typer.prompt(prompt, default="", show_default=False).strip()


def ask_password(prompt: str = "Enter your password") -> str:
    return typer.prompt(prompt, default="", show_default=False, hide_input=True)


def show_menu(title: str, options: Sequence[str]) -> None:
    typer.echo(title)
    for i, option in enumerate(options):
        typer.echo(f"{i + 1}. {option}")


def choose(
    count: int,
    on_out_of_range: OutOfRange,
    error_message: str = "Invalid selection",
) -> int:
    """Read a 1-based menu choice and return its 0-based index.

    Args:
        count: Number of options in the menu.
        on_out_of_range: Whether an out-of-range number re-prompts or aborts.
        error_message: Message of the error raised when aborting.

    Raises:
        InvalidSelectionError: On non-numeric input, or on an out-of-range
            number when on_out_of_range is OutOfRange.ABORT.
    """
    while True:
        raw = ask(CHOICE_PROMPT)
        if not raw.isdecimal():
            raise InvalidSelectionError("Invalid input", value=raw)
        choice = int(raw)
        if 1 <= choice <= count:
            return choice - 1
        if on_out_of_range is OutOfRange.ABORT:
            raise InvalidSelectionError(error_message, value=raw)
        typer.echo("Invalid choice. Please try again.")


def ask_credentials() -> tuple[str, str]:
    """Prompt for a username and a masked password."""
    username = ask("Enter your username")
    password = ask_password()
    return username, password
