"""Environment inspection: nested-session guard and socket directory lookup."""

import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from zlaunch.exceptions import NestedSessionError
from zlaunch.logging_config import get_logger

logger = get_logger("zlaunch.services.environment")


def find_nested_markers(
    environ: Mapping[str, str],
    markers: Iterable[str],
    ignored: Iterable[str] = (),
) -> list[str]:
    """Return the variable names that indicate we are inside a session.

    Args:
        environ: Snapshot of the process environment.
        markers: Substrings that mark a service variable (e.g. "ZELLIJ").
        ignored: Exact variable names that are user configuration, not markers.

    Returns:
        Sorted list of matching variable names.
    """
    marker_list = list(markers)
    skip = set(ignored)
    return sorted(
        name
        for name in environ
        if name not in skip and any(marker in name for marker in marker_list)
    )


def check_not_nested(
    environ: Mapping[str, str],
    markers: Iterable[str],
    ignored: Iterable[str] = (),
) -> None:
    """Refuse to continue when the environment shows a running session.

    Raises:
        NestedSessionError: If any marker variable is present.
    """
    found = find_nested_markers(environ, markers, ignored)
    if found:
        logger.warning(f"Nested invocation detected via: {', '.join(found)}")
        raise NestedSessionError(found)


def resolve_socket_dir(environ: Mapping[str, str], subdir: str = "") -> Path:
    """Work out where the service keeps its session sockets.

    Lookup order: $ZELLIJ_SOCKET_DIR, then $XDG_RUNTIME_DIR/zellij, then
    /tmp/zellij-<uid>. The configured subdir is
    appended when non-empty.
    """
    if explicit := environ.get("ZELLIJ_SOCKET_DIR"):
        base = Path(explicit)
    elif runtime_dir := environ.get("XDG_RUNTIME_DIR"):
        base = Path(runtime_dir) / "zellij"
    else:
        uid = os.getuid() if hasattr(os, "getuid") else 0
        base = Path("/tmp") / f"zellij-{uid}"

    socket_dir = base / subdir if subdir else base
    logger.debug(f"Resolved socket directory: {socket_dir}")
    return socket_dir
