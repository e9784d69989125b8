"""Unit tests for the runtime script model."""

import json

import pytest
from pydantic import ValidationError

from scriptflow.script.models import RuntimeNode, RuntimeOption, RuntimeScript


def _script(**nodes: dict) -> RuntimeScript:
    return RuntimeScript.from_document({"startNodeId": "a", "nodes": nodes})


class TestDocumentCodec:
    """Tests for reading and writing the stored JSON shape."""

    def test_reads_camel_case_keys(self):
        # Arrange
        document = {
            "startNodeId": "a",
            "nodes": {
                "a": {
                    "text": "Type?",
                    "options": [{"label": "Color", "value": "C", "next": "b", "priceMod": 0.5}],
                },
                "b": {"text": "Copies?", "inputType": "number", "next": "c"},
                "c": {"text": "Done", "isFinal": True},
            },
        }

        # Act
        script = RuntimeScript.from_document(document)

        # Assert
        assert script.start_node_id == "a"
        assert script.nodes["a"].options[0].price_mod == 0.5
        assert script.nodes["b"].input_type == "number"
        assert script.nodes["c"].is_final is True

    def test_accepts_python_field_names(self):
        node = RuntimeNode(text="Copies?", input_type="number", next="b")

        assert node.model_dump(by_alias=True, exclude_none=True) == {
            "text": "Copies?",
            "inputType": "number",
            "next": "b",
        }

    def test_rejects_malformed_nodes(self):
        with pytest.raises(ValidationError):
            RuntimeScript.from_document({"startNodeId": "a", "nodes": {"a": {"options": "x"}}})

    def test_to_json_is_sorted_and_stable(self):
        script = RuntimeScript(
            start_node_id="a",
            nodes={"a": RuntimeNode(text="Hi", options=[RuntimeOption(label="X", value="x")])},
        )

        rendered = script.to_json()

        assert json.loads(rendered) == {
            "nodes": {"a": {"options": [{"label": "X", "value": "x"}], "text": "Hi"}},
            "startNodeId": "a",
        }
        assert rendered == RuntimeScript.from_document(json.loads(rendered)).to_json()


class TestUsability:
    """Tests for is_usable, reachability and completeness."""

    @pytest.mark.parametrize(
        "script",
        [
            RuntimeScript(),
            RuntimeScript(start_node_id="a"),
            RuntimeScript(nodes={"a": RuntimeNode(text="Hi", is_final=True)}),
            RuntimeScript(start_node_id="b", nodes={"a": RuntimeNode(text="Hi", is_final=True)}),
        ],
    )
    def test_unusable_scripts(self, script):
        assert not script.is_usable()
        assert script.reachable_ids() == []

    def test_reachable_ids_are_breadth_first(self):
        # Arrange
        script = _script(
            a={"text": "?", "options": [{"label": "1", "value": "1", "next": "b"},
                                        {"label": "2", "value": "2", "next": "c"}]},
            b={"text": "B", "inputType": "number", "next": "d"},
            c={"text": "C", "isFinal": True},
            d={"text": "D", "isFinal": True},
            unreachable={"text": "U", "isFinal": True},
        )

        # Act & Assert
        assert script.reachable_ids() == ["a", "b", "c", "d"]

    def test_cycles_terminate(self):
        script = _script(
            a={"text": "A", "inputType": "number", "next": "b"},
            b={"text": "B", "inputType": "number", "next": "a"},
        )

        assert script.reachable_ids() == ["a", "b"]
        assert script.is_complete()

    def test_dangling_references_are_reported(self):
        # Arrange
        script = _script(
            a={"text": "?", "options": [{"label": "1", "value": "1", "next": "gone"},
                                        {"label": "2", "value": "2"}]},
        )

        # Act
        problems = script.dangling_references()

        # Assert
        assert problems == ["a.options[0]: unknown node 'gone'", "a.options[1]: missing next"]
        assert not script.is_complete()

    def test_non_final_dead_end_is_reported(self):
        script = _script(a={"text": "Hello"})

        assert script.dangling_references() == ["a: no continuation and not final"]

    def test_input_without_next_is_reported(self):
        script = _script(a={"text": "Copies?", "inputType": "number"})

        assert script.dangling_references() == ["a.next: missing next"]
