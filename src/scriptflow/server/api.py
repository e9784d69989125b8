"""Scriptflow FastAPI Application.

Thin HTTP adapter over the script engine for the marketplace web handlers:
compiling builder documents, resolving a service's script, stepping a chat
session and turning a finished chat into an order line.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Any

from dotenv import load_dotenv
from fastapi import Body, FastAPI
from pydantic import ValidationError

from scriptflow import __version__
from scriptflow.compiler.script_compiler import compile_builder
from scriptflow.config.loader import DEFAULT_CONFIG_NAME, ConfigLoader
from scriptflow.core.errors import ConfigError, ScriptError, ScriptflowError
from scriptflow.extraction.orders import OrderLine, build_order_line
from scriptflow.observability.logging import setup_logging
from scriptflow.runtime.interpreter import ConversationInterpreter
from scriptflow.script.loader import resolve_script_with_source
from scriptflow.script.models import RuntimeScript
from scriptflow.server.dependencies import MessagesDep
from scriptflow.server.errors import global_exception_handler, scriptflow_exception_handler
from scriptflow.server.models import (
    CompileResponse,
    HealthResponse,
    LineItemRequest,
    ResolveRequest,
    ResolveResponse,
    TurnRequest,
    TurnResponse,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - load configuration on startup."""
    load_dotenv()

    config_path = os.environ.get("SCRIPTFLOW_CONFIG_PATH")
    if not config_path and os.path.exists(DEFAULT_CONFIG_NAME):
        config_path = DEFAULT_CONFIG_NAME

    if not config_path:
        logger.warning(
            "SCRIPTFLOW_CONFIG_PATH not set and scriptflow.yaml not found. Using defaults."
        )
        yield
        return

    logger.info(f"Loading config from {config_path}")
    try:
        config = ConfigLoader.load(config_path)
    except (FileNotFoundError, ConfigError) as e:
        logger.error(f"Failed to load config, using defaults: {e}")
        yield
        return

    app.state.config = config
    setup_logging(config.settings.logging.level, config.settings.logging.json_file)
    yield


# Create FastAPI app
app = FastAPI(
    title="Scriptflow Service Script Engine",
    description="Compiles builder graphs into chat scripts and runs them",
    version=__version__,
    lifespan=lifespan,
)

app.add_exception_handler(ScriptflowError, scriptflow_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)


def _runtime_script(document: dict[str, Any]) -> RuntimeScript:
    try:
        return RuntimeScript.from_document(document)
    except ValidationError as e:
        raise ScriptError(f"Runtime script is malformed: {e.error_count()} errors") from e


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(status="healthy", version=__version__)


@app.post("/scripts/compile", response_model=CompileResponse)
async def compile_document(
    messages: MessagesDep,
    document: dict[str, Any] = Body(..., description="Builder document"),
) -> CompileResponse:
    """Compile a builder document into a runtime script."""
    script = compile_builder(document, messages)
    return CompileResponse(
        script=script.to_document(),
        usable=script.is_usable(),
        problems=script.dangling_references(),
    )


@app.post("/scripts/resolve", response_model=ResolveResponse)
async def resolve(request: ResolveRequest, messages: MessagesDep) -> ResolveResponse:
    """Return the script a chat session for a service should run."""
    script, fallback = resolve_script_with_source(
        request.script, request.service_name, request.business_name, messages
    )
    return ResolveResponse(script=script.to_document(), fallback=fallback)


@app.post("/sessions/turn", response_model=TurnResponse)
async def session_turn(request: TurnRequest) -> TurnResponse:
    """Replay the transcript, apply the new answer and return the next prompt."""
    interpreter = ConversationInterpreter(_runtime_script(request.script))
    result = interpreter.turn(request.transcript, request.answer)
    return TurnResponse(
        prompt=result.prompt,
        transcript=result.transcript,
        complete=result.complete,
    )


@app.post("/orders/line-item", response_model=OrderLine)
async def order_line_item(request: LineItemRequest, messages: MessagesDep) -> OrderLine:
    """Derive quantity and details from a finished chat and price the order line."""
    return build_order_line(
        request.service_name,
        request.service_price,
        answers=request.answers,
        summary=request.summary,
        messages=messages,
    )
