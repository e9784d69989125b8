"""Authoring-time graph model produced by the visual script builder.

The graph is a plain, serializable description of nodes and the edges drawn
between their ports. It performs no validation: a half-edited graph is still a
valid FlowGraph, and structural queries return ``None`` or ``[]`` instead of
raising when data is missing.
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from scriptflow.core.errors import GraphError

# Port keys used by the builder
START_PORT = "out_start"
NEXT_PORT = "out_next"
YES_PORT = "out_yes"
NO_PORT = "out_no"
OPTION_PORT_PREFIX = "out_opt_"
INPUT_PORT = "in_flow"


class NodeKind(str, Enum):
    """Node variants the builder can place on the canvas."""

    START = "start"
    QUESTION = "question"


class InputKind(str, Enum):
    """How a question node collects its answer."""

    MULTIPLE_CHOICE = "multiple_choice"
    YES_NO = "yes_no"
    NUMBER = "number"
    TEXT_AREA = "text_area"
    FILE_UPLOAD = "file_upload"


def option_port(index: int) -> str:
    """Port key of the multiple choice option at ``index``."""
    return f"{OPTION_PORT_PREFIX}{index}"


class Position(BaseModel):
    """Canvas coordinates. Irrelevant to runtime semantics."""

    x: float = 0.0
    y: float = 0.0


class QuestionData(BaseModel):
    """Payload of a question node."""

    prompt_text: str = ""
    # Kept as a plain string so unknown kinds from older builders still load
    input_kind: str | None = None
    options: list[str] = Field(default_factory=list)


class GraphNode(BaseModel):
    """One authored step."""

    id: str
    kind: str
    position: Position = Field(default_factory=Position)
    question: QuestionData | None = None

    @property
    def is_start(self) -> bool:
        return self.kind == NodeKind.START.value

    @property
    def is_question(self) -> bool:
        return self.kind == NodeKind.QUESTION.value


class GraphEdge(BaseModel):
    """Directed connection from a node output port to another node's input."""

    source_node_id: str
    source_port: str = ""
    target_node_id: str
    target_port: str = INPUT_PORT


class FlowGraph(BaseModel):
    """The builder's source of truth: nodes plus edges."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    viewport: dict[str, float] | None = None

    def find_node(self, node_id: str) -> GraphNode | None:
        """Return the node with ``node_id`` or None."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def outgoing_edges(self, node_id: str) -> list[GraphEdge]:
        """Return edges leaving ``node_id`` in authoring order."""
        return [edge for edge in self.edges if edge.source_node_id == node_id]

    def start_node(self) -> GraphNode | None:
        """Return the entry node, if the graph has one."""
        for node in self.nodes:
            if node.is_start:
                return node
        return None

    @classmethod
    def from_builder(cls, document: dict[str, Any] | str | None) -> "FlowGraph":
        """Build a graph from a builder-saved document.

        Accepts ``{nodes: [...], connections: [...], viewport?}`` either as a
        mapping or as the JSON string the builder posts on save.

        Raises:
            GraphError: If the document is not JSON, not a mapping, or has
                wrongly typed fields
        """
        if document is None:
            return cls()
        if isinstance(document, str):
            try:
                document = json.loads(document) if document.strip() else {}
            except json.JSONDecodeError as e:
                raise GraphError("Builder document is not valid JSON") from e
        if not isinstance(document, dict):
            raise GraphError(
                "Builder document must be a mapping", got=type(document).__name__
            )

        try:
            return cls._from_mapping(document)
        except (ValidationError, TypeError) as e:
            raise GraphError("Builder document has malformed fields") from e

    @classmethod
    def _from_mapping(cls, document: dict[str, Any]) -> "FlowGraph":
        nodes = [_node_from_builder(raw) for raw in document.get("nodes") or []]
        edges = [
            GraphEdge(
                source_node_id=str(raw.get("source", "")),
                source_port=str(raw.get("sourcePort") or ""),
                target_node_id=str(raw.get("target", "")),
                target_port=str(raw.get("targetPort") or INPUT_PORT),
            )
            for raw in document.get("connections") or []
            if isinstance(raw, dict)
        ]
        viewport = document.get("viewport")
        return cls(
            nodes=[node for node in nodes if node is not None],
            edges=edges,
            viewport=viewport if isinstance(viewport, dict) else None,
        )

    def to_builder(self) -> dict[str, Any]:
        """Serialize back to the builder document shape."""
        nodes: list[dict[str, Any]] = []
        for node in self.nodes:
            data: dict[str, Any] = {}
            if node.question is not None:
                data = {
                    "question_text": node.question.prompt_text,
                    "input_type": node.question.input_kind,
                    "answer_options": list(node.question.options),
                }
            nodes.append(
                {
                    "id": node.id,
                    "type": node.kind,
                    "x": node.position.x,
                    "y": node.position.y,
                    "data": data,
                }
            )
        document: dict[str, Any] = {
            "nodes": nodes,
            "connections": [
                {
                    "source": edge.source_node_id,
                    "sourcePort": edge.source_port,
                    "target": edge.target_node_id,
                    "targetPort": edge.target_port,
                }
                for edge in self.edges
            ],
        }
        if self.viewport is not None:
            document["viewport"] = dict(self.viewport)
        return document


def _node_from_builder(raw: Any) -> GraphNode | None:
    if not isinstance(raw, dict) or "id" not in raw:
        return None

    kind = str(raw.get("type") or "")
    data = raw.get("data") if isinstance(raw.get("data"), dict) else {}
    question = None
    if kind == NodeKind.QUESTION.value:
        options = data.get("answer_options") or []
        question = QuestionData(
            prompt_text=str(data.get("question_text") or ""),
            input_kind=str(data["input_type"]) if data.get("input_type") else None,
            options=[str(opt) for opt in options],
        )

    return GraphNode(
        id=str(raw["id"]),
        kind=kind,
        position=Position(x=raw.get("x") or 0.0, y=raw.get("y") or 0.0),
        question=question,
    )
