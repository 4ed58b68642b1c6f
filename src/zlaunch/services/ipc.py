"""Framed message codec and local-socket connection.

Every message travels as a 4-byte big-endian length followed by a UTF-8
JSON array ``[message, context]``, where ``context`` is a list of strings
naming the call sites that produced the message.
"""

from __future__ import annotations

import json
import socket
import struct
from pathlib import Path
from typing import Any

from zlaunch.exceptions import ProtocolError
from zlaunch.logging_config import get_logger

logger = get_logger("zlaunch.services.ipc")

# Client -> server
CONN_STATUS = "ConnStatus"
# Server -> client
CONNECTED = "Connected"

HEADER = struct.Struct(">I")
MAX_FRAME_SIZE = 1024 * 1024


def encode_message(message: Any, context: list[str] | None = None) -> bytes:
    """Encode a message and its context into one frame."""
    payload = json.dumps([message, context or []], separators=(",", ":")).encode("utf-8")
    if len(payload) > MAX_FRAME_SIZE:
        raise ProtocolError(f"Frame of {len(payload)} bytes exceeds {MAX_FRAME_SIZE}")
    return HEADER.pack(len(payload)) + payload


def decode_payload(payload: bytes) -> tuple[Any, list[str]]:
    """Decode a frame body into ``(message, context)``.

    Raises:
        ProtocolError: If the body is not a JSON ``[message, context]`` pair.
    """
    try:
        data = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ProtocolError(f"Undecodable frame: {e}") from e

    if not isinstance(data, list) or len(data) != 2:
        raise ProtocolError(f"Expected a [message, context] pair, got {type(data).__name__}")
    message, context = data
    if not isinstance(context, list):
        raise ProtocolError("Frame context must be a list")
    return message, [str(item) for item in context]


class IpcConnection:
    """A client connection to one session socket.

    Connection failures are raised as the underlying ``OSError`` subclasses,
    so callers can tell ``ConnectionRefusedError`` apart from everything else.
    """

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock

    @classmethod
    def connect(cls, path: Path, timeout: float | None = None) -> IpcConnection:
        """Open a stream connection to a unix socket path."""
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.settimeout(timeout)
            sock.connect(str(path))
        except OSError:
            sock.close()
            raise
        return cls(sock)

    def send(self, message: Any, context: list[str] | None = None) -> None:
        """Send a single framed message."""
        self._sock.sendall(encode_message(message, context))

    def recv(self) -> tuple[Any, list[str]] | None:
        """Receive one framed message.

        Returns:
            ``(message, context)``, or None if the peer closed the connection
            before sending anything.

        Raises:
            ProtocolError: On a truncated, oversized or malformed frame.
        """
        header = self._read_exact(HEADER.size, allow_eof=True)
        if header is None:
            return None
        (length,) = HEADER.unpack(header)
        if length > MAX_FRAME_SIZE:
            raise ProtocolError(f"Frame of {length} bytes exceeds {MAX_FRAME_SIZE}")
        payload = self._read_exact(length, allow_eof=False) or b""
        return decode_payload(payload)

    def _read_exact(self, size: int, allow_eof: bool) -> bytes | None:
        buf = bytearray()
        while len(buf) < size:
            chunk = self._sock.recv(size - len(buf))
            if not chunk:
                if allow_eof and not buf:
                    return None
                raise ProtocolError(f"Connection closed after {len(buf)} of {size} bytes")
            buf.extend(chunk)
        return bytes(buf)

    def close(self) -> None:
        self._sock.close()

    def __enter__(self) -> IpcConnection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
