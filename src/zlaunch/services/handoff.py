"""Detach-and-launch: hand the terminal over to a freshly spawned client.

The launcher must not linger as a parent of the client, so it forks, lets
the original process exit right away, detaches the child into its own
session and spawns the client from there. The client inherits the original
stdin/stdout/stderr; nothing is piped or redirected.
"""

from __future__ import annotations

import os
import subprocess
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from shutil import which
from typing import NoReturn

from zlaunch.exceptions import DependencyMissingError, HandoffError
from zlaunch.logging_config import get_logger
from zlaunch.models.config import Config
from zlaunch.models.session import LaunchRequest

logger = get_logger("zlaunch.services.handoff")


def _spawn_inherited(argv: list[str]) -> subprocess.Popen[bytes]:
    # stdin/stdout/stderr default to the parent's descriptors
    return subprocess.Popen(argv)


def _spawn_new_group(argv: list[str]) -> subprocess.Popen[bytes]:
    if os.name == "nt":
        return subprocess.Popen(argv, creationflags=subprocess.CREATE_NEW_PROCESS_GROUP)
    return subprocess.Popen(argv, start_new_session=True)


def _flush_std_streams() -> None:
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError):
            continue


class Handoff(ABC):
    """Transfers the terminal to a client process and ends the launcher."""

    @abstractmethod
    def handoff(self, argv: list[str]) -> NoReturn:
        """Start ``argv`` attached to the inherited terminal, then exit.

        Raises:
            HandoffError: If the launcher cannot detach or spawn the client.
        """


@dataclass
class ForkHandoff(Handoff):
    """Fork-based handoff for POSIX systems.

    The original process exits with status 0 as soon as the fork succeeds, so
    it never holds the terminal while the client starts. A failure to detach
    or spawn therefore surfaces in the child: it raises HandoffError there,
    after the shell has already seen the launcher succeed, and the message
    reaches the terminal and the log from the child's pid.
    """

    fork: Callable[[], int] = field(default_factory=lambda: os.fork)
    setsid: Callable[[], object] = field(default_factory=lambda: os.setsid)
    spawn: Callable[[list[str]], object] = _spawn_inherited
    exit: Callable[[int], NoReturn] = os._exit

    def handoff(self, argv: list[str]) -> NoReturn:
        # Anything buffered would otherwise be written twice after the fork
        _flush_std_streams()

        try:
            pid = self.fork()
        except OSError as e:
            logger.exception("fork failed")
            raise HandoffError(f"Failed to fork the launcher: {e}") from e

        if pid != 0:
            logger.info(f"Forked launcher child {pid}, parent exiting")
            self.exit(0)

        logger.info(f"Launcher child {os.getpid()} detaching from the terminal session")
        try:
            self.setsid()
        except OSError as e:
            logger.exception("setsid failed in forked child")
            raise HandoffError(f"Broke the forked connection: {e}") from e

        try:
            process = self.spawn(argv)
        except OSError as e:
            logger.exception(f"Failed to spawn client: {argv}")
            raise HandoffError(f"Failed to start {argv[0]}: {e}") from e

        logger.info(f"Spawned client {getattr(process, 'pid', '?')}: {' '.join(argv)}")
        _flush_std_streams()
        self.exit(0)


@dataclass
class SpawnHandoff(Handoff):
    """Handoff for platforms without fork: a new process group, then exit."""

    spawn: Callable[[list[str]], object] = _spawn_new_group
    exit: Callable[[int], NoReturn] = os._exit

    def handoff(self, argv: list[str]) -> NoReturn:
        _flush_std_streams()
        try:
            process = self.spawn(argv)
        except OSError as e:
            logger.exception(f"Failed to spawn client: {argv}")
            raise HandoffError(f"Failed to start {argv[0]}: {e}") from e

        logger.info(f"Spawned client {getattr(process, 'pid', '?')}: {' '.join(argv)}")
        self.exit(0)


def get_handoff() -> Handoff:
    """Pick the handoff implementation for this platform."""
    if hasattr(os, "fork") and hasattr(os, "setsid"):
        return ForkHandoff()
    return SpawnHandoff()


def build_client_argv(request: LaunchRequest, config: Config) -> list[str]:
    """Build the client command line for attaching to or creating a session."""
    args = config.create_args if request.create else config.attach_args
    return [config.client_binary, *args, request.session_name]


def ensure_client_available(config: Config) -> None:
    """Ensure the client binary can be found on PATH."""
    if which(config.client_binary) is None:
        logger.warning(f"Client binary not found: {config.client_binary}")
        raise DependencyMissingError([config.client_binary])


def launch(request: LaunchRequest, config: Config, handoff: Handoff | None = None) -> NoReturn:
    """Hand the terminal over to a client for the requested session.

    Never returns on success: the launcher process exits and only the client
    remains attached to the terminal.

    Raises:
        DependencyMissingError: If the client binary is not installed.
        HandoffError: If detaching or spawning fails.
    """
    ensure_client_available(config)
    argv = build_client_argv(request, config)
    action = "Creating" if request.create else "Attaching to"
    logger.info(f"{action} session '{request.session_name}': {' '.join(argv)}")
    (handoff or get_handoff()).handoff(argv)
