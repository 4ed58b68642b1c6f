"""Service layer for the session registry and client handoff."""

from zlaunch.services.handoff import ForkHandoff, Handoff, SpawnHandoff, get_handoff, launch
from zlaunch.services.prober import probe
from zlaunch.services.registry import list_endpoints
from zlaunch.services.sessions import SessionService

__all__ = [
    "ForkHandoff",
    "Handoff",
    "SessionService",
    "SpawnHandoff",
    "get_handoff",
    "launch",
    "list_endpoints",
    "probe",
]
