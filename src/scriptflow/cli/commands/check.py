"""Check command: is a stored script runnable as is?"""

from pathlib import Path

import typer

from scriptflow.cli.documents import read_document
from scriptflow.core.errors import ScriptflowError
from scriptflow.script.loader import load_script


def check_command(
    script_file: Path = typer.Argument(..., help="Builder document or runtime script"),
) -> None:
    """Report whether a script has a start node and no dangling paths."""
    try:
        script = load_script(read_document(script_file))
    except (FileNotFoundError, ScriptflowError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not script.is_usable():
        typer.echo("Not usable: no resolvable start node (the default script would be used)")
        raise typer.Exit(1)

    problems = script.dangling_references()
    if problems:
        typer.echo(f"Incomplete: {len(problems)} dangling references")
        for problem in problems:
            typer.echo(f"  - {problem}")
        raise typer.Exit(1)

    reachable = len(script.reachable_ids())
    typer.echo(f"OK: {reachable} reachable nodes, start at '{script.start_node_id}'")
