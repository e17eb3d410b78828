"""Console and confirmation prompts shared by the CLI and VCS clients."""

from collections.abc import Callable

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

console = Console()


def ask(message: str) -> bool:
    """Ask the user a yes/no question.

    Args:
        message: Question to ask

    Returns:
        True if the user answered yes
    """
    return Confirm.ask(escape(message), console=console)


def make_confirm(always_yes: bool = False, never: bool = False) -> Callable[[str], bool]:
    """Create the confirmation prompt used before discarding local changes.

    Args:
        always_yes: Answer yes to every question without asking
        never: Answer no to every question without asking

    Returns:
        Function asking a question and returning the answer
    """
    if always_yes:
        return lambda message: _auto_answer(message, True)
    if never:
        return lambda message: _auto_answer(message, False)
    return ask


def _auto_answer(message: str, answer: bool) -> bool:
    console.print(f"{escape(message)} [dim]({'yes' if answer else 'no'})[/dim]")
    return answer
