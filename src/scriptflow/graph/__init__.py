"""Builder graph model and editing intents."""

from scriptflow.graph.models import (
    FlowGraph,
    GraphEdge,
    GraphNode,
    InputKind,
    NodeKind,
    Position,
    QuestionData,
)

__all__ = [
    "FlowGraph",
    "GraphEdge",
    "GraphNode",
    "InputKind",
    "NodeKind",
    "Position",
    "QuestionData",
]
