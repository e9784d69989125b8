"""Shared fixtures for Scriptflow tests.

Builder documents are written in the exact shape the visual builder saves,
so the same fixtures exercise the codec, the compiler and the interpreter.
"""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from scriptflow.compiler.script_compiler import compile_builder
from scriptflow.script.models import RuntimeScript
from tests.factories import connection, question, start


@pytest.fixture
def print_shop_document() -> dict[str, Any]:
    """Service flow: service -> print type -> copies -> upload."""
    return {
        "nodes": [
            start("node_1"),
            question("node_2", "What service?", "multiple_choice", ["Printing", "Scanning", "Binding"]),
            question("node_3", "What type of printing?", "multiple_choice", ["BW", "Color"]),
            question("node_4", "How many copies?", "number"),
            question("node_5", "Upload your document", "file_upload"),
        ],
        "connections": [
            connection("node_1", "out_start", "node_2"),
            connection("node_2", "out_opt_0", "node_3"),
            connection("node_3", "out_opt_0", "node_4"),
            connection("node_3", "out_opt_1", "node_4"),
            connection("node_4", "out_next", "node_5"),
        ],
        "viewport": {"x": 400, "y": 300, "scale": 1},
    }


@pytest.fixture
def print_shop_script(print_shop_document: dict[str, Any]) -> RuntimeScript:
    """Compiled print shop flow."""
    return compile_builder(print_shop_document)


@pytest.fixture
def test_client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    """API client running with default configuration."""
    monkeypatch.delenv("SCRIPTFLOW_CONFIG_PATH", raising=False)
    from scriptflow.server.api import app

    return TestClient(app)
