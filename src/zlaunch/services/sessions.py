"""Session resolver: combine the registry scan with liveness probes."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from zlaunch.logging_config import get_logger
from zlaunch.models.session import Endpoint, Verdict
from zlaunch.services.prober import probe
from zlaunch.services.registry import list_endpoints

logger = get_logger("zlaunch.services.sessions")

Prober = Callable[[Path, float | None], Verdict]


@dataclass
class SessionService:
    """Service for discovering live sessions in a registry directory."""

    directory: Path
    probe_timeout: float | None = 1.0
    prober: Prober = probe

    def probe_endpoints(self) -> list[tuple[Endpoint, Verdict]]:
        """Probe every socket in the registry, one after another.

        Raises:
            RegistryUnavailableError: If the directory cannot be enumerated.
        """
        results: list[tuple[Endpoint, Verdict]] = []
        for endpoint in list_endpoints(self.directory):
            verdict = self.prober(endpoint.path, self.probe_timeout)
            logger.debug(f"Session '{endpoint.name}': {verdict.value}")
            results.append((endpoint, verdict))
        return results

    def resolve_sessions(self) -> list[str]:
        """Return the names of live sessions in directory order.

        Raises:
            RegistryUnavailableError: If the directory cannot be enumerated.
        """
        names = [
            endpoint.name for endpoint, verdict in self.probe_endpoints() if verdict is Verdict.LIVE
        ]
        logger.info(f"Live sessions: {names}")
        return names

    @staticmethod
    def session_exists(name: str, sessions: Iterable[str]) -> bool:
        """Check whether a name is among the resolved live sessions."""
        return any(session == name for session in sessions)
