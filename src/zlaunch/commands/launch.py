"""Launch command - pick a zellij session and attach to it."""

import os
from typing import Annotated

import typer
from rich.markup import escape

from zlaunch import __version__
from zlaunch.console import (
    console,
    create_status_table,
    print_error,
    print_info,
    print_no_sessions,
)
from zlaunch.exceptions import (
    DependencyMissingError,
    HandoffError,
    InvalidSessionNameError,
    NestedSessionError,
    RegistryUnavailableError,
    SelectionAbortedError,
)
from zlaunch.logging_config import get_logger, set_verbose, setup_logging
from zlaunch.models.config import Config, set_config
from zlaunch.models.session import LaunchRequest, Verdict
from zlaunch.selector import select_or_create
from zlaunch.services.config_loader import load_config
from zlaunch.services.environment import check_not_nested, resolve_socket_dir
from zlaunch.services.handoff import launch as launch_session
from zlaunch.services.sessions import SessionService

logger = get_logger("zlaunch.commands.launch")

VERDICT_STYLES = {
    Verdict.LIVE: "[green]live[/green]",
    Verdict.STALE: "[yellow]stale (removed)[/yellow]",
    Verdict.UNREACHABLE: "[red]unreachable[/red]",
}


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"zlaunch version {__version__}")
        raise typer.Exit()


def launch(
    session: Annotated[
        str | None,
        typer.Argument(
            help="Session to attach to, or to create if it is not running",
            show_default=False,
        ),
    ] = None,
    list_sessions: Annotated[
        bool,
        typer.Option(
            "--list",
            "-l",
            help="List sessions in the socket directory and exit. Stale sockets are deleted.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Write debug output to the log file"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Attach to a zellij session, creating it if needed.

    Without a SESSION, running sessions are listed and you are prompted for
    one; a name that is not running starts a new session. The launcher then
    steps aside so only the zellij client stays on the terminal.
    """
    # Logging first, so warnings about a bad config file are not lost
    setup_logging(verbose)
    config = load_config()
    if verbose:
        config.verbose = True
    set_config(config)
    set_verbose(config.verbose)

    try:
        check_not_nested(os.environ, config.nested_markers, config.ignored_env)
    except NestedSessionError as e:
        print_error(f"{e}. Detach from the current session first.")
        raise typer.Exit(-1) from e

    service = _session_service(config)

    if list_sessions:
        _list_sessions(service)
        return

    try:
        running = service.resolve_sessions()
    except RegistryUnavailableError as e:
        logger.error(f"Registry unavailable: {e}")
        console.print(f"Looks like {config.client_binary} isn't available. Exiting.")
        raise typer.Exit(-1) from e

    if session is None:
        try:
            session = select_or_create(running)
        except SelectionAbortedError as e:
            console.print()
            print_info("No session selected.")
            raise typer.Exit(1) from e

    try:
        request = LaunchRequest(session, create=not service.session_exists(session, running))
    except InvalidSessionNameError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    if request.create:
        logger.info(f"Session '{session}' is not running, a new one will be created")

    try:
        launch_session(request, config)
    except DependencyMissingError as e:
        print_error(str(e))
        console.print(f"\nInstall {config.client_binary} or set ZLAUNCH_CLIENT to its path.")
        raise typer.Exit(1) from e
    except HandoffError as e:
        print_error(str(e))
        raise typer.Exit(1) from e


def _session_service(config: Config) -> SessionService:
    socket_dir = config.socket_dir or resolve_socket_dir(os.environ, config.socket_subdir)
    return SessionService(socket_dir, probe_timeout=config.probe_timeout)


def _list_sessions(service: SessionService) -> None:
    """Print every socket in the registry with its probe result."""
    try:
        results = service.probe_endpoints()
    except RegistryUnavailableError as e:
        print_error(str(e))
        raise typer.Exit(-1) from e

    if not results:
        print_no_sessions()
        return

    table = create_status_table(f"Sessions in {service.directory}")
    table.add_column("#", justify="right")
    table.add_column("Session", style="cyan")
    table.add_column("Status")

    live_index = 0
    for endpoint, verdict in results:
        index = ""
        if verdict is Verdict.LIVE:
            index = str(live_index)
            live_index += 1
        table.add_row(index, escape(endpoint.name), VERDICT_STYLES[verdict])

    console.print(table)
    console.print("\n[dim]Attach with:[/dim] zlaunch <session-name>")
