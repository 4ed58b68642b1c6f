"""Tests for the framed message codec."""

import socket
import struct

import pytest

from zlaunch.exceptions import ProtocolError
from zlaunch.services.ipc import (
    CONN_STATUS,
    CONNECTED,
    MAX_FRAME_SIZE,
    IpcConnection,
    decode_payload,
    encode_message,
)


class TestEncodeMessage:
    """Tests for encode_message."""

    def test_frame_layout(self) -> None:
        """A frame is a big-endian length followed by a JSON pair."""
        frame = encode_message(CONN_STATUS)

        (length,) = struct.unpack(">I", frame[:4])
        assert length == len(frame) - 4
        assert frame[4:] == b'["ConnStatus",[]]'

    def test_context_is_included(self) -> None:
        """The context list travels next to the message."""
        frame = encode_message(CONNECTED, ["server", "route"])
        assert frame[4:] == b'["Connected",["server","route"]]'

    def test_oversized_message_rejected(self) -> None:
        """Messages that would exceed the frame limit are refused."""
        with pytest.raises(ProtocolError, match="exceeds"):
            encode_message("x" * (MAX_FRAME_SIZE + 1))


class TestDecodePayload:
    """Tests for decode_payload."""

    def test_structured_message(self) -> None:
        """Non-string messages decode as their JSON value."""
        message, context = decode_payload(b'[{"Exit":"Normal"},["a"]]')
        assert message == {"Exit": "Normal"}
        assert context == ["a"]

    @pytest.mark.parametrize(
        "payload",
        [b"not json", b'"Connected"', b'["Connected"]', b'["Connected",{}]', b"\xff\xfe"],
    )
    def test_malformed_payloads(self, payload: bytes) -> None:
        """Anything that is not a [message, context] pair is a protocol error."""
        with pytest.raises(ProtocolError):
            decode_payload(payload)


class TestIpcConnection:
    """Tests for IpcConnection over a socket pair."""

    def test_send_and_receive(self) -> None:
        """A message sent on one end is received intact on the other."""
        left, right = socket.socketpair()
        with IpcConnection(left) as sender, IpcConnection(right) as receiver:
            sender.send(CONN_STATUS, ["client"])
            assert receiver.recv() == (CONN_STATUS, ["client"])

    def test_eof_before_frame_returns_none(self) -> None:
        """A peer that closes without sending anything yields None."""
        left, right = socket.socketpair()
        left.close()
        with IpcConnection(right) as receiver:
            assert receiver.recv() is None

    def test_truncated_frame(self) -> None:
        """A frame cut short by the peer is a protocol error."""
        left, right = socket.socketpair()
        left.sendall(struct.pack(">I", 10) + b"abc")
        left.close()
        with IpcConnection(right) as receiver, pytest.raises(ProtocolError, match="closed"):
            receiver.recv()

    def test_oversized_header(self) -> None:
        """A length header above the limit is rejected before reading the body."""
        left, right = socket.socketpair()
        left.sendall(struct.pack(">I", MAX_FRAME_SIZE + 1))
        with IpcConnection(right) as receiver, pytest.raises(ProtocolError, match="exceeds"):
            receiver.recv()
        left.close()
