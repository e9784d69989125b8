"""Turns a stored service script into a runtime script the interpreter can run.

A service stores either the builder document (``nodes`` is a list) or an
already compiled runtime script (``nodes`` is a mapping). Anything else, or
anything that does not resolve to a usable start node, is replaced by the
fallback script.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from scriptflow.compiler.script_compiler import compile_builder
from scriptflow.config.models import MessagesConfig
from scriptflow.core.errors import GraphError, ScriptError
from scriptflow.script.fallback import default_script
from scriptflow.script.models import RuntimeScript

logger = logging.getLogger(__name__)


def load_script(
    stored: dict[str, Any] | str | None, messages: MessagesConfig | None = None
) -> RuntimeScript:
    """Load a stored script document, compiling builder documents.

    Returns an empty script for an absent or empty document.

    Raises:
        ScriptError: If the document is neither a builder nor a runtime script
    """
    if stored is None:
        return RuntimeScript()

    if isinstance(stored, str):
        if not stored.strip():
            return RuntimeScript()
        try:
            stored = json.loads(stored)
        except json.JSONDecodeError as e:
            raise ScriptError("Stored script is not valid JSON") from e

    if not isinstance(stored, dict):
        raise ScriptError("Stored script must be a mapping", got=type(stored).__name__)
    if not stored:
        return RuntimeScript()

    nodes = stored.get("nodes")
    if isinstance(nodes, list):
        try:
            return compile_builder(stored, messages)
        except GraphError as e:
            raise ScriptError(f"Builder document could not be read: {e}") from e

    try:
        return RuntimeScript.from_document(stored)
    except ValidationError as e:
        raise ScriptError(f"Runtime script is malformed: {e.error_count()} errors") from e


def resolve_script_with_source(
    stored: dict[str, Any] | str | None,
    service_name: str | None = None,
    business_name: str | None = None,
    messages: MessagesConfig | None = None,
) -> tuple[RuntimeScript, bool]:
    """Like resolve_script, also reporting whether the fallback was used.

    Returns:
        Tuple of (script, used_fallback).
    """
    try:
        script = load_script(stored, messages)
    except ScriptError as e:
        logger.warning(f"Using fallback script for service '{service_name}': {e}")
        return default_script(service_name, business_name), True

    if not script.is_usable():
        logger.warning(
            f"Using fallback script for service '{service_name}': no resolvable start node"
        )
        return default_script(service_name, business_name), True
    return script, False


def resolve_script(
    stored: dict[str, Any] | str | None,
    service_name: str | None = None,
    business_name: str | None = None,
    messages: MessagesConfig | None = None,
) -> RuntimeScript:
    """Return the script a respondent should run for a service.

    Falls back to the default script whenever the stored one is absent,
    empty, unreadable or lacks a resolvable start node.
    """
    script, _ = resolve_script_with_source(stored, service_name, business_name, messages)
    return script
