"""zlaunch CLI - pick a zellij session and hand the terminal over to it."""

import typer

from zlaunch.commands.launch import launch

# Create the Typer app
app = typer.Typer(
    name="zlaunch",
    help="Pick a zellij session and hand the terminal over to it.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Single command: zlaunch [SESSION]
app.command(name="launch")(launch)


if __name__ == "__main__":
    app()
