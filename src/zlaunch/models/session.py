"""Session registry data types."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from zlaunch.utils.validation import validate_session_name


class Verdict(Enum):
    """Outcome of probing one registry entry."""

    LIVE = "live"
    STALE = "stale"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class Endpoint:
    """A socket entry in the registry directory."""

    name: str
    path: Path


@dataclass(frozen=True)
class LaunchRequest:
    """A validated request to attach to (or create) a session."""

    session_name: str
    create: bool = False

    def __post_init__(self) -> None:
        validate_session_name(self.session_name)
