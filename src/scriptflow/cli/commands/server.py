"""Server command to start API."""

import os
from pathlib import Path

import typer
import uvicorn

from scriptflow.config.loader import ConfigLoader
from scriptflow.core.errors import ConfigError


def server_command(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to scriptflow.yaml", exists=True
    ),
    host: str | None = typer.Option(None, "--host", "-h"),
    port: int | None = typer.Option(None, "--port", "-p"),
    reload: bool = typer.Option(False, "--reload"),
) -> None:
    """Start the Scriptflow API server."""
    settings = None
    if config is not None:
        # 1. Validate Config
        try:
            settings = ConfigLoader.load(config).settings
        except (FileNotFoundError, ConfigError) as e:
            typer.echo(f"Invalid config: {e}", err=True)
            raise typer.Exit(1)

        # 2. The server process loads config from env
        os.environ["SCRIPTFLOW_CONFIG_PATH"] = str(config.absolute())

    bind_host = host or (settings.server.host if settings else "0.0.0.0")
    bind_port = port or (settings.server.port if settings else 8000)
    typer.echo(f"Starting Scriptflow server on http://{bind_host}:{bind_port}")

    uvicorn.run(
        "scriptflow.server.api:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level="info",
    )
