"""Runtime configuration for zlaunch."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Config:
    """Runtime configuration for zlaunch operations."""

    # Client settings
    client_binary: str = "zellij"
    attach_args: list[str] = field(default_factory=lambda: ["-a"])
    create_args: list[str] = field(default_factory=lambda: ["-s"])

    # Registry settings
    socket_dir: Path | None = None  # Explicit override; resolved from the environment otherwise
    socket_subdir: str = "contract_version_1"
    probe_timeout: float = 1.0  # seconds, covers connect and the single reply

    # Nested-invocation guard
    nested_markers: list[str] = field(default_factory=lambda: ["ZELLIJ"])
    ignored_env: list[str] = field(
        default_factory=lambda: ["ZELLIJ_SOCKET_DIR", "ZELLIJ_CONFIG_DIR", "ZELLIJ_CONFIG_FILE"]
    )

    # Output settings
    verbose: bool = False


# Global config instance (can be overridden via CLI)
_config: Config | None = None


def get_config() -> Config:
    """Get the current configuration, creating a default if none exists."""
    global _config  # noqa: PLW0603
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration."""
    global _config  # noqa: PLW0603
    _config = config
