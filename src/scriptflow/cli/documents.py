"""Reading and writing JSON documents for CLI commands."""

import json
from pathlib import Path
from typing import Any

from scriptflow.core.errors import ScriptError


def read_document(path: Path) -> dict[str, Any]:
    """Read a builder or runtime script document.

    Raises:
        FileNotFoundError: If the file does not exist
        ScriptError: If the file is not a JSON object
    """
    if not path.exists():
        raise FileNotFoundError(f"Script file not found: {path}")

    try:
        document = json.loads(path.read_text(encoding="utf-8") or "{}")
    except json.JSONDecodeError as e:
        raise ScriptError("Script file is not valid JSON", path=str(path)) from e

    if not isinstance(document, dict):
        raise ScriptError("Script file must contain a JSON object", path=str(path))
    return document
