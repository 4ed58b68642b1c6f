"""Shared test fixtures for zlaunch tests."""

import logging
import os
import shutil
import socket
import tempfile
import threading
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from zlaunch import logging_config
from zlaunch.exceptions import ProtocolError
from zlaunch.models import config as config_module
from zlaunch.services import config_loader
from zlaunch.services.ipc import CONNECTED, IpcConnection, encode_message


class FakeSessionServer:
    """A unix socket server that answers each connection with a fixed reply."""

    def __init__(self, path: Path, reply: bytes | None) -> None:
        self.path = path
        self.reply = reply
        self.received: list[tuple[object, list[str]] | None] = []
        self._stop = threading.Event()
        self._sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self._sock.bind(str(path))
        self._sock.listen()
        self._sock.settimeout(0.05)
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except TimeoutError:
                continue
            except OSError:
                return
            with conn:
                conn.settimeout(5)
                try:
                    self.received.append(IpcConnection(conn).recv())
                except (OSError, ProtocolError):
                    continue
                if self.reply is not None:
                    conn.sendall(self.reply)

    def close(self) -> None:
        self._stop.set()
        self._thread.join(timeout=5)
        self._sock.close()


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep logs, config and session markers away from the real user."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in list(os.environ):
        if "ZELLIJ" in name or name.startswith("ZLAUNCH_"):
            monkeypatch.delenv(name)

    monkeypatch.setattr(logging_config, "_log_dir", home / ".zlaunch" / "logs")
    monkeypatch.setattr(logging_config, "_handler", None)
    monkeypatch.setattr(config_loader, "CONFIG_FILE", home / ".zlaunch" / "config.json")
    monkeypatch.setattr(config_module, "_config", None)

    yield

    root_logger = logging.getLogger("zlaunch")
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)


@pytest.fixture
def socket_dir() -> Iterator[Path]:
    """A short registry directory path, since unix socket paths are length-limited."""
    directory = Path(tempfile.mkdtemp(prefix="zl", dir="/tmp"))
    yield directory
    shutil.rmtree(directory, ignore_errors=True)


@pytest.fixture
def session_server(socket_dir: Path) -> Iterator[Callable[..., FakeSessionServer]]:
    """Factory for fake session servers inside the registry directory."""
    servers: list[FakeSessionServer] = []

    def _start(name: str, reply: bytes | None = encode_message(CONNECTED)) -> FakeSessionServer:
        server = FakeSessionServer(socket_dir / name, reply)
        servers.append(server)
        return server

    yield _start

    for server in servers:
        server.close()


@pytest.fixture
def stale_socket(socket_dir: Path) -> Callable[[str], Path]:
    """Factory for socket files that nothing is listening on."""

    def _make(name: str) -> Path:
        path = socket_dir / name
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.bind(str(path))
        sock.close()
        return path

    return _make
