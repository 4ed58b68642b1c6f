"""Custom exceptions for zlaunch."""


class ZlaunchError(Exception):
    """Base exception for all zlaunch errors."""


class DependencyMissingError(ZlaunchError):
    """Raised when a required external dependency is not installed."""

    def __init__(self, dependencies: list[str]) -> None:
        self.dependencies = dependencies
        deps_str = ", ".join(dependencies)
        super().__init__(f"Missing required dependencies: {deps_str}")


class RegistryUnavailableError(ZlaunchError):
    """Raised when the socket directory exists but cannot be enumerated."""


class ProtocolError(ZlaunchError):
    """Raised when a peer sends a frame that cannot be decoded."""


class HandoffError(ZlaunchError):
    """Raised when forking, detaching or spawning the client fails."""


class InvalidSessionNameError(ZlaunchError, ValueError):
    """Raised for an empty session name or one containing whitespace."""


class NestedSessionError(ZlaunchError):
    """Raised when zlaunch is started from inside a zellij session."""

    def __init__(self, variables: list[str]) -> None:
        self.variables = variables
        super().__init__(f"Refusing to run inside a zellij session (found {', '.join(variables)})")


class SelectionAbortedError(ZlaunchError):
    """Raised when the interactive prompt reaches end of input."""
