"""Scriptflow - Service Script Engine.

Compiles the node/edge graphs drawn in the visual service-script builder into
runtime conversation scripts, runs them turn by turn, and turns the collected
answers into an order quantity and detail line.

Quick start:
    from scriptflow import ConversationInterpreter, compile_builder, extract

    script = compile_builder(saved_builder_document)
    interpreter = ConversationInterpreter(script)
    state = interpreter.advance(interpreter.start(), "Printing")
"""

__version__ = "1.0.0"
__author__ = "Scriptflow Contributors"

from scriptflow.compiler import compile_builder, compile_script
from scriptflow.core.errors import (
    ConfigError,
    GraphError,
    InterpreterError,
    InvalidAnswerError,
    ScriptError,
    ScriptflowError,
    SessionCompleteError,
    StuckTransitionError,
    UnknownNodeError,
)
from scriptflow.extraction import OrderDetails, extract, extract_legacy, extract_order_details
from scriptflow.graph import FlowGraph
from scriptflow.runtime import ConversationInterpreter, SessionState, TranscriptEntry
from scriptflow.script import RuntimeScript, default_script
from scriptflow.script.loader import load_script, resolve_script

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Engine
    "FlowGraph",
    "RuntimeScript",
    "compile_builder",
    "compile_script",
    "default_script",
    "load_script",
    "resolve_script",
    "ConversationInterpreter",
    "SessionState",
    "TranscriptEntry",
    "OrderDetails",
    "extract",
    "extract_legacy",
    "extract_order_details",
    # Errors
    "ScriptflowError",
    "ConfigError",
    "GraphError",
    "ScriptError",
    "InterpreterError",
    "StuckTransitionError",
    "UnknownNodeError",
    "InvalidAnswerError",
    "SessionCompleteError",
]
