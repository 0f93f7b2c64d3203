"""Operator confirmation prompt."""

from typing import Callable

AFFIRMATIVE = frozenset(("y", "yes"))


def confirm(message: str, input_fn: Callable[[str], str] = input) -> bool:
    """
    Ask a yes/no question on the terminal. Defaults to no.

    End of input (piped stdin, Ctrl-D) counts as no.
    """
    try:
        answer = input_fn(f"{message}\n[y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in AFFIRMATIVE
