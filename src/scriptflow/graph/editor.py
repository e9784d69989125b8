"""Builder intents applied to a FlowGraph.

Every intent is a pure function: it returns a new graph and leaves the input
untouched, so a view layer can dispatch intents and keep undo history by
holding on to previous graphs.
"""

import logging
import re
from typing import Any

from scriptflow.core.errors import GraphError
from scriptflow.graph.models import (
    INPUT_PORT,
    FlowGraph,
    GraphEdge,
    GraphNode,
    InputKind,
    NodeKind,
    Position,
    QuestionData,
)

logger = logging.getLogger(__name__)

DEFAULT_QUESTION_TEXT = "New Question"
DEFAULT_OPTIONS = ("Option 1", "Option 2")
NEW_OPTION_TEXT = "New Option"

_NODE_ID = re.compile(r"^node_(\d+)$")
_EDITABLE_FIELDS = frozenset({"prompt_text", "input_kind", "options"})


def next_node_id(graph: FlowGraph) -> str:
    """Return the next free ``node_<n>`` identifier."""
    highest = 0
    for node in graph.nodes:
        match = _NODE_ID.match(node.id)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"node_{highest + 1}"


def add_node(
    graph: FlowGraph,
    kind: NodeKind | str,
    x: float = 0.0,
    y: float = 0.0,
    data: dict[str, Any] | None = None,
) -> tuple[FlowGraph, str]:
    """Place a new node on the canvas.

    Returns:
        Tuple of (new graph, id of the created node).
    """
    try:
        kind = NodeKind(kind)
    except ValueError as e:
        raise GraphError("Unknown node kind", kind=kind) from e
    data = data or {}
    node_id = next_node_id(graph)

    question = None
    if kind is NodeKind.QUESTION:
        question = QuestionData(
            prompt_text=data.get("prompt_text") or DEFAULT_QUESTION_TEXT,
            input_kind=data.get("input_kind") or InputKind.MULTIPLE_CHOICE.value,
            options=list(data.get("options") or DEFAULT_OPTIONS),
        )
    elif graph.start_node() is not None:
        raise GraphError("Graph already has a start node", node_id=graph.start_node().id)

    node = GraphNode(id=node_id, kind=kind.value, position=Position(x=x, y=y), question=question)
    return graph.model_copy(update={"nodes": [*graph.nodes, node]}, deep=True), node_id


def connect(graph: FlowGraph, source_id: str, source_port: str, target_id: str) -> FlowGraph:
    """Draw an edge from ``source_port`` of one node to another node's input.

    An existing edge leaving the same port is replaced. Self-connections are
    ignored.
    """
    if source_id == target_id:
        logger.debug(f"Ignoring self-connection on '{source_id}'")
        return graph.model_copy(deep=True)

    edges = [
        edge
        for edge in graph.edges
        if not (edge.source_node_id == source_id and edge.source_port == source_port)
    ]
    edges.append(
        GraphEdge(
            source_node_id=source_id,
            source_port=source_port,
            target_node_id=target_id,
            target_port=INPUT_PORT,
        )
    )
    return graph.model_copy(update={"edges": edges}, deep=True)


def disconnect(graph: FlowGraph, source_id: str, source_port: str) -> FlowGraph:
    """Remove the edge leaving ``source_port`` of ``source_id``, if any."""
    edges = [
        edge
        for edge in graph.edges
        if not (edge.source_node_id == source_id and edge.source_port == source_port)
    ]
    return graph.model_copy(update={"edges": edges}, deep=True)


def _update_question(graph: FlowGraph, node_id: str, **changes: Any) -> FlowGraph:
    updated = graph.model_copy(deep=True)
    node = updated.find_node(node_id)
    if node is None or node.question is None:
        logger.debug(f"No question node '{node_id}' to update")
        return updated
    node.question = node.question.model_copy(update=changes)
    return updated


def update_node_data(graph: FlowGraph, node_id: str, key: str, value: Any) -> FlowGraph:
    """Change one field of a question node.

    Switching a question to multiple choice without options seeds the
    default options so the node keeps at least two output ports.

    Raises:
        GraphError: If ``key`` is not an editable question field
    """
    if key not in _EDITABLE_FIELDS:
        raise GraphError("Unknown question field", key=key)

    changes: dict[str, Any] = {key: list(value) if key == "options" else value}
    node = graph.find_node(node_id)
    if (
        key == "input_kind"
        and value == InputKind.MULTIPLE_CHOICE.value
        and node is not None
        and node.question is not None
        and not node.question.options
    ):
        changes["options"] = list(DEFAULT_OPTIONS)
    return _update_question(graph, node_id, **changes)


def add_option(graph: FlowGraph, node_id: str, label: str = NEW_OPTION_TEXT) -> FlowGraph:
    """Append an answer option to a question node."""
    node = graph.find_node(node_id)
    options = list(node.question.options) if node and node.question else []
    return _update_question(graph, node_id, options=[*options, label])


def update_option(graph: FlowGraph, node_id: str, index: int, label: str) -> FlowGraph:
    """Rename the answer option at ``index``."""
    node = graph.find_node(node_id)
    if node is None or node.question is None or not 0 <= index < len(node.question.options):
        return graph.model_copy(deep=True)
    options = list(node.question.options)
    options[index] = label
    return _update_question(graph, node_id, options=options)


def remove_option(graph: FlowGraph, node_id: str, index: int) -> FlowGraph:
    """Drop the answer option at ``index``.

    Edges keep their ``out_opt_<n>`` port keys, so edges drawn from later
    options now refer to the option that moved into their index.
    """
    node = graph.find_node(node_id)
    if node is None or node.question is None or not 0 <= index < len(node.question.options):
        return graph.model_copy(deep=True)
    options = list(node.question.options)
    del options[index]
    return _update_question(graph, node_id, options=options)


def move_node(graph: FlowGraph, node_id: str, x: float, y: float) -> FlowGraph:
    """Move a node on the canvas."""
    updated = graph.model_copy(deep=True)
    node = updated.find_node(node_id)
    if node is not None:
        node.position = Position(x=x, y=y)
    return updated


def delete_node(graph: FlowGraph, node_id: str) -> FlowGraph:
    """Remove a node together with every edge attached to it.

    Raises:
        GraphError: If ``node_id`` is the start node
    """
    node = graph.find_node(node_id)
    if node is not None and node.is_start:
        raise GraphError("The start node cannot be deleted", node_id=node_id)

    return graph.model_copy(
        update={
            "nodes": [n for n in graph.nodes if n.id != node_id],
            "edges": [
                e for e in graph.edges if e.source_node_id != node_id and e.target_node_id != node_id
            ],
        },
        deep=True,
    )
