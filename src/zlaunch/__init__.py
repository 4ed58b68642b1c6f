"""zlaunch - pick a zellij session and hand the terminal over to it."""

__version__ = "0.1.0"
