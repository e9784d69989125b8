"""Compiles a builder FlowGraph into a RuntimeScript."""

import logging
from typing import Any

from scriptflow.compiler.ports import PortStrategyRegistry
from scriptflow.config.models import MessagesConfig
from scriptflow.graph.models import FlowGraph, QuestionData
from scriptflow.script.models import RuntimeNode, RuntimeScript

logger = logging.getLogger(__name__)

FINISH_NODE_ID = "generated_finish_node"


def compile_script(graph: FlowGraph, messages: MessagesConfig | None = None) -> RuntimeScript:
    """
    Compile a builder graph into a runtime script.

    Never raises on an incomplete graph: a graph without a start edge yields a
    script whose ``start_node_id`` is None, and callers are expected to check
    ``RuntimeScript.is_usable()`` and fall back to the default script.

    Args:
        graph: Authored graph
        messages: Canned texts for synthesized nodes

    Returns:
        Runtime script. Compiling the same graph always yields an equal script.
    """
    messages = messages or MessagesConfig()
    script = RuntimeScript()

    # 1. Materialize question nodes; start nodes only mark the entry edge
    for node in graph.nodes:
        if node.is_start:
            continue
        if not node.is_question:
            logger.warning(f"Skipping node '{node.id}' of unsupported kind '{node.kind}'")
            continue
        question = node.question or QuestionData()
        strategy = PortStrategyRegistry.get(question.input_kind)
        script.nodes[node.id] = strategy.build(question, messages)

    # 2. Link nodes through their ports
    for edge in graph.edges:
        source = graph.find_node(edge.source_node_id)
        if source is None:
            logger.warning(f"Ignoring edge from unknown node '{edge.source_node_id}'")
            continue

        if source.is_start:
            script.start_node_id = edge.target_node_id
            continue

        runtime_node = script.nodes.get(source.id)
        if runtime_node is None:
            continue

        question = source.question or QuestionData()
        strategy = PortStrategyRegistry.get(question.input_kind)
        if not strategy.route(runtime_node, edge.source_port, edge.target_node_id):
            logger.warning(
                f"Ignoring edge '{source.id}:{edge.source_port}' -> '{edge.target_node_id}': "
                f"no such port"
            )

    # 3. Send every dangling exit to one shared terminal node
    _complete(script, messages)

    logger.info(
        f"Compiled script with {len(script.nodes)} nodes from "
        f"{len(graph.nodes)} graph nodes and {len(graph.edges)} edges "
        f"(start={script.start_node_id})"
    )
    return script


def _finish_node_id(script: RuntimeScript) -> str:
    finish_id = FINISH_NODE_ID
    suffix = 1
    while finish_id in script.nodes:
        finish_id = f"{FINISH_NODE_ID}_{suffix}"
        suffix += 1
    if finish_id != FINISH_NODE_ID:
        logger.warning(
            f"Graph already has a node named '{FINISH_NODE_ID}', terminal node is '{finish_id}'"
        )
    return finish_id


def _complete(script: RuntimeScript, messages: MessagesConfig) -> None:
    needs_finish = False
    finish_id = _finish_node_id(script)

    def resolvable(target: str | None) -> bool:
        if target and target not in script.nodes:
            logger.warning(f"Edge target '{target}' is not a question node, ending the path")
            return False
        return bool(target)

    for node in script.nodes.values():
        if node.options:
            for option in node.options:
                if not resolvable(option.next):
                    option.next = finish_id
                    needs_finish = True
        elif node.input_type:
            if not resolvable(node.next):
                node.next = finish_id
                needs_finish = True
        elif not node.is_final and not node.next:
            node.is_final = True
            if not node.text:
                node.text = messages.completion_text

    if needs_finish:
        script.nodes[finish_id] = RuntimeNode(text=messages.finish_text, is_final=True)


def compile_builder(
    document: dict[str, Any] | str | None, messages: MessagesConfig | None = None
) -> RuntimeScript:
    """Compile a builder-saved document (mapping or JSON string)."""
    return compile_script(FlowGraph.from_builder(document), messages)
