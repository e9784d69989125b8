"""Chat command for interactive sessions."""

from pathlib import Path

import typer

from scriptflow.core.errors import ScriptflowError


def chat_command(
    script_file: Path = typer.Argument(..., help="Builder document or runtime script"),
    service: str = typer.Option("Service", "--service", "-s", help="Service name"),
    business: str | None = typer.Option(None, "--business", "-b", help="Business name"),
    price: float = typer.Option(0.0, "--price", "-p", help="Unit price of the service"),
) -> None:
    """Walk through a script as a respondent would."""
    from scriptflow.cli.chat_runner import ChatConfig, run_chat_session

    chat_config = ChatConfig(
        script_path=script_file,
        service_name=service,
        business_name=business,
        price=price,
    )

    try:
        run_chat_session(chat_config)
    except KeyboardInterrupt:
        pass
    except (FileNotFoundError, ScriptflowError) as e:
        typer.echo(f"Fatal error: {e}", err=True)
        raise typer.Exit(1)
