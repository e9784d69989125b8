"""The shipped example builder document compiles to a complete script."""

from pathlib import Path

from scriptflow.cli.documents import read_document
from scriptflow.config.loader import ConfigLoader
from scriptflow.script.loader import load_script

EXAMPLE_DIR = Path(__file__).resolve().parents[2] / "examples" / "print_shop"


def test_example_builder_is_complete():
    # Arrange
    config = ConfigLoader.load(EXAMPLE_DIR)

    # Act
    script = load_script(read_document(EXAMPLE_DIR / "builder.json"), config.settings.messages)

    # Assert
    assert script.is_complete()
    assert script.start_node_id == "node_2"
    # "No" on stapling is left open and ends the conversation
    assert script.nodes["node_5"].options[1].next == "generated_finish_node"
    assert script.nodes["generated_finish_node"].text.startswith("Thank you! Your print job")
