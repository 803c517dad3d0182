"""Small interactive helpers shared by the subcommands."""

from __future__ import annotations

from clonekit.errors import UserCancelled


def confirm_prompt(message: str) -> None:
    """Print *message*, read a line, raise UserCancelled unless it is 'yes'."""
    print(message, end="", flush=True)
    try:
        response = input()
    except (EOFError, KeyboardInterrupt):
        print()
        raise UserCancelled("Aborted.")
    if response.strip() != "yes":
        raise UserCancelled("Aborted.")
