"""Data models for zlaunch."""

from zlaunch.models.config import Config
from zlaunch.models.session import Endpoint, LaunchRequest, Verdict

__all__ = ["Config", "Endpoint", "LaunchRequest", "Verdict"]
