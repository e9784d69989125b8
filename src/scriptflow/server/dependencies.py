"""FastAPI dependencies for server endpoints.

Uses dependency injection instead of global state for better
testability and multi-worker safety.
"""

from typing import Annotated

from fastapi import Depends, Request

from scriptflow.config.models import MessagesConfig, ScriptflowConfig


def get_config(request: Request) -> ScriptflowConfig:
    """Dependency to get the loaded configuration, defaults if none was loaded."""
    config = getattr(request.app.state, "config", None)
    if config is None:
        config = ScriptflowConfig()
        request.app.state.config = config
    return config


def get_messages(config: Annotated[ScriptflowConfig, Depends(get_config)]) -> MessagesConfig:
    """Dependency to get the canned texts used by the engine."""
    return config.settings.messages


# Type aliases for cleaner endpoint signatures
MessagesDep = Annotated[MessagesConfig, Depends(get_messages)]
