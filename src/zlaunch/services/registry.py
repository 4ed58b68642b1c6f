"""Registry scanner: find the socket entries in the session directory."""

import os
import stat
from pathlib import Path

from zlaunch.exceptions import RegistryUnavailableError
from zlaunch.logging_config import get_logger
from zlaunch.models.session import Endpoint

logger = get_logger("zlaunch.services.registry")


def list_endpoints(directory: Path) -> list[Endpoint]:
    """List the socket entries in a registry directory.

    A missing directory means no sessions are running and yields an empty
    list. Entries that are not sockets, or that disappear while we look at
    them, are skipped.

    Args:
        directory: The directory the service creates its sockets in.

    Returns:
        Endpoints in directory enumeration order.

    Raises:
        RegistryUnavailableError: If the directory exists but cannot be read.
    """
    endpoints: list[Endpoint] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    mode = entry.stat(follow_symlinks=False).st_mode
                except FileNotFoundError:
                    logger.debug(f"Entry vanished during scan: {entry.path}")
                    continue
                if not stat.S_ISSOCK(mode):
                    logger.debug(f"Skipping non-socket entry: {entry.path}")
                    continue
                endpoints.append(Endpoint(name=entry.name, path=Path(entry.path)))
    except FileNotFoundError:
        logger.info(f"Registry directory does not exist: {directory}")
        return []
    except OSError as e:
        logger.exception(f"Failed to enumerate registry directory {directory}")
        raise RegistryUnavailableError(f"Cannot read session directory {directory}: {e}") from e

    logger.debug(f"Found {len(endpoints)} socket(s) in {directory}")
    return endpoints
