"""Builders for documents in the shape the visual script builder saves."""

from typing import Any


def question(
    node_id: str,
    text: str,
    input_type: str | None,
    options: list[str] | None = None,
    x: float = 0,
    y: float = 0,
) -> dict[str, Any]:
    """Builder node for a question."""
    data: dict[str, Any] = {"question_text": text, "answer_options": options or []}
    if input_type is not None:
        data["input_type"] = input_type
    return {"id": node_id, "type": "question", "x": x, "y": y, "data": data}


def start(node_id: str = "node_1") -> dict[str, Any]:
    """Builder node for the start trigger."""
    return {"id": node_id, "type": "start", "x": 0, "y": 0, "data": {}}


def connection(source: str, port: str, target: str) -> dict[str, Any]:
    """Builder connection from ``port`` of ``source`` to ``target``."""
    return {"source": source, "sourcePort": port, "target": target, "targetPort": "in_flow"}


def builder_document(
    nodes: list[dict[str, Any]], connections: list[dict[str, Any]]
) -> dict[str, Any]:
    """Full builder document."""
    return {"nodes": nodes, "connections": connections}
