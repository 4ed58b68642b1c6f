"""CLI commands for zlaunch."""

from zlaunch.commands.launch import launch

__all__ = ["launch"]
