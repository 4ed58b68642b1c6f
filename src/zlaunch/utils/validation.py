"""Validation utilities for zlaunch."""

from zlaunch.exceptions import InvalidSessionNameError


def validate_session_name(name: str) -> str:
    """Check that a session name can be passed to the client as one argument.

    Args:
        name: The candidate session name, exactly as entered.

    Returns:
        The name, unchanged.

    Raises:
        InvalidSessionNameError: If the name is empty or contains whitespace.
    """
    if not name:
        raise InvalidSessionNameError("Session name cannot be empty")
    if any(char.isspace() for char in name):
        raise InvalidSessionNameError(f"Invalid session name: {name!r}. Whitespace is not allowed")
    return name
