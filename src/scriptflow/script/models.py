"""Runtime script: the compiled, interpreter-ready conversation tree.

Field names follow Python conventions; the JSON document uses the camelCase
keys stored alongside services (``startNodeId``, ``inputType``, ``isFinal``,
``priceMod``). Unset fields are omitted on serialization.
"""

import json
from collections import deque
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

INPUT_NUMBER = "number"
INPUT_FILE = "file"


class RuntimeOption(BaseModel):
    """A discrete choice offered by a runtime node."""

    model_config = ConfigDict(populate_by_name=True)

    label: str
    value: str
    next: str | None = None
    price_mod: float | None = Field(default=None, alias="priceMod")


class RuntimeNode(BaseModel):
    """One step of the conversation."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    options: list[RuntimeOption] | None = None
    input_type: str | None = Field(default=None, alias="inputType")
    next: str | None = None
    is_final: bool | None = Field(default=None, alias="isFinal")

    @property
    def terminal(self) -> bool:
        return bool(self.is_final)

    def exits(self) -> list[str | None]:
        """Continuations the interpreter may follow from this node."""
        if self.options:
            return [option.next for option in self.options]
        if self.input_type or self.next:
            return [self.next]
        return []


class RuntimeScript(BaseModel):
    """Compiled script with a designated entry node."""

    model_config = ConfigDict(populate_by_name=True)

    start_node_id: str | None = Field(default=None, alias="startNodeId")
    nodes: dict[str, RuntimeNode] = Field(default_factory=dict)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "RuntimeScript":
        return cls.model_validate(document)

    def to_document(self) -> dict[str, Any]:
        """Serialize to the stored JSON shape."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self, indent: int | None = None) -> str:
        """Stable JSON rendering (sorted keys)."""
        return json.dumps(self.to_document(), indent=indent, sort_keys=True)

    def is_usable(self) -> bool:
        """True when the script has nodes and its start node exists."""
        return bool(self.nodes) and self.start_node_id is not None and (
            self.start_node_id in self.nodes
        )

    def reachable_ids(self) -> list[str]:
        """Node ids reachable from the start node, in breadth-first order."""
        if not self.is_usable():
            return []

        seen: list[str] = []
        queue: deque[str] = deque([self.start_node_id])  # type: ignore[list-item]
        while queue:
            node_id = queue.popleft()
            if node_id in seen or node_id not in self.nodes:
                continue
            seen.append(node_id)
            node = self.nodes[node_id]
            if node.terminal:
                continue
            queue.extend(target for target in node.exits() if target)
        return seen

    def dangling_references(self) -> list[str]:
        """Describe every reachable exit that does not lead to a known node."""
        problems: list[str] = []
        for node_id in self.reachable_ids():
            node = self.nodes[node_id]
            if node.terminal:
                continue
            exits = node.exits()
            if not exits:
                problems.append(f"{node_id}: no continuation and not final")
            for index, target in enumerate(exits):
                where = f"{node_id}.options[{index}]" if node.options else f"{node_id}.next"
                if not target:
                    problems.append(f"{where}: missing next")
                elif target not in self.nodes:
                    problems.append(f"{where}: unknown node '{target}'")
        return problems

    def is_complete(self) -> bool:
        """Every reachable node is final or has a resolvable continuation."""
        return self.is_usable() and not self.dangling_references()
