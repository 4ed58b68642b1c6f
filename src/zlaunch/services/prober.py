"""Liveness prober: tell live sessions apart from stale socket files."""

from pathlib import Path

from zlaunch.exceptions import ProtocolError
from zlaunch.logging_config import get_logger
from zlaunch.models.session import Verdict
from zlaunch.services.ipc import CONN_STATUS, CONNECTED, IpcConnection

logger = get_logger("zlaunch.services.prober")


def probe(path: Path, timeout: float | None = 1.0) -> Verdict:
    """Probe one session socket with a connection-status handshake.

    A refused connection means the server behind the socket is gone, so the
    socket file is removed. Every other failure leaves the file in place.

    Args:
        path: Path to the session socket.
        timeout: Seconds allowed for the connect and for the single reply.

    Returns:
        LIVE if the server acknowledged, STALE if the connection was refused,
        UNREACHABLE otherwise.
    """
    try:
        connection = IpcConnection.connect(path, timeout=timeout)
    except ConnectionRefusedError:
        logger.info(f"Connection refused, removing stale socket: {path}")
        remove_stale_socket(path)
        return Verdict.STALE
    except OSError as e:
        logger.debug(f"Could not connect to {path}: {e}")
        return Verdict.UNREACHABLE

    with connection:
        try:
            connection.send(CONN_STATUS)
            reply = connection.recv()
        except (OSError, ProtocolError) as e:
            logger.debug(f"Status handshake with {path} failed: {e}")
            return Verdict.UNREACHABLE

    if reply is None:
        logger.debug(f"{path} closed without replying")
        return Verdict.UNREACHABLE

    message, _context = reply
    if message == CONNECTED:
        logger.debug(f"{path} is live")
        return Verdict.LIVE

    logger.debug(f"{path} replied with {message!r}, not treating as live")
    return Verdict.UNREACHABLE


def remove_stale_socket(path: Path) -> None:
    """Delete a stale socket file, tolerating it being gone already."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        # Another probe will retry on the next run
        logger.warning(f"Failed to remove stale socket {path}: {e}")
