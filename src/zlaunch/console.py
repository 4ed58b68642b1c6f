"""Rich console singleton and helpers for terminal output."""

from rich.console import Console
from rich.table import Table

# Global console instance
console = Console()


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def create_status_table(title: str) -> Table:
    """Create a table for displaying status information."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    return table


def print_no_sessions() -> None:
    """Print the hint shown when no live session was found."""
    console.print("[yellow]No running zellij sessions found.[/yellow]")
    console.print("\nStart a new session with:")
    console.print("  [cyan]zlaunch <session-name>[/cyan]")
