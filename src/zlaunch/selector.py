"""Interactive session picker."""

from collections.abc import Callable, Sequence

from rich.markup import escape

from zlaunch.console import console
from zlaunch.exceptions import InvalidSessionNameError, SelectionAbortedError
from zlaunch.logging_config import get_logger
from zlaunch.utils.validation import validate_session_name

logger = get_logger("zlaunch.selector")

PROMPT = ">>> "
INTERRUPT_HINT = "\rEnter a session name, or press Ctrl+D to leave without launching"


def select_or_create(
    names: Sequence[str],
    read_line: Callable[[str], str] | None = None,
) -> str:
    """Ask the user for a session to join or create.

    Lists the live sessions, then reads lines until one is a valid session
    name. Empty lines and names with whitespace are ignored. Ctrl+C prints
    a hint and keeps prompting.

    Args:
        names: Live session names to offer.
        read_line: Reads one line given a prompt; defaults to the console.

    Returns:
        The first valid line, verbatim.

    Raises:
        SelectionAbortedError: If input ends before a valid name was entered.
    """
    reader = read_line or console.input
    console.print(
        "Create a new session by entering the name for it, or select one from these options:"
    )

    while True:
        for index, name in enumerate(names):
            console.print(f"({index}) :: [cyan]{escape(name)}[/cyan]")

        try:
            line = reader(PROMPT)
        except KeyboardInterrupt:
            console.print(INTERRUPT_HINT)
            continue
        except EOFError as e:
            logger.info("Input closed before a session was chosen")
            raise SelectionAbortedError("No session selected") from e

        try:
            return validate_session_name(line)
        except InvalidSessionNameError as e:
            logger.debug(f"Rejected input: {e}")
            continue
