"""Compile command: builder document to runtime script."""

from pathlib import Path

import typer

from scriptflow.cli.documents import read_document
from scriptflow.compiler.script_compiler import compile_builder
from scriptflow.core.errors import ScriptflowError


def compile_command(
    builder_file: Path = typer.Argument(..., help="Builder document saved by the script builder"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the runtime script here instead of stdout"
    ),
) -> None:
    """Compile a builder document into a runtime script."""
    try:
        script = compile_builder(read_document(builder_file))
    except (FileNotFoundError, ScriptflowError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    rendered = script.to_json(indent=2)
    if output is None:
        typer.echo(rendered)
    else:
        output.write_text(rendered + "\n", encoding="utf-8")
        typer.echo(f"Wrote {len(script.nodes)} nodes to {output}")

    if not script.is_usable():
        typer.echo("Warning: script has no resolvable start node", err=True)
