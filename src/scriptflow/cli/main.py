"""Main CLI entry point for Scriptflow"""

import typer

from scriptflow import __version__
from scriptflow.cli.commands.chat import chat_command
from scriptflow.cli.commands.check import check_command
from scriptflow.cli.commands.compile import compile_command
from scriptflow.cli.commands.server import server_command

app = typer.Typer(
    name="scriptflow",
    help="Scriptflow - Service Script Engine",
    add_completion=False,
)

app.command(name="compile", help="Compile a builder document")(compile_command)
app.command(name="check", help="Check that a script is runnable")(check_command)
app.command(name="chat", help="Walk through a script interactively")(chat_command)
app.command(name="server", help="Start the Scriptflow API server")(server_command)


def version_callback(value: bool) -> None:
    """Print version and exit"""
    if value:
        typer.echo(f"Scriptflow version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Scriptflow - Service Script Engine"""
    pass


def cli() -> None:
    """Entry point for CLI"""
    app()


if __name__ == "__main__":
    cli()
