"""End-to-end flow: authored graph to order details."""

import pytest

from scriptflow.compiler.script_compiler import FINISH_NODE_ID
from scriptflow.extraction.answers import extract
from scriptflow.extraction.orders import build_order_line
from scriptflow.runtime.interpreter import ConversationInterpreter
from scriptflow.script.fallback import default_script
from scriptflow.script.loader import resolve_script


def _run(interpreter: ConversationInterpreter, answers: list) -> list:
    state = interpreter.start()
    for answer in answers:
        state = interpreter.advance(state, answer)
    assert state.complete is True
    return list(state.transcript)


def test_compiled_print_shop_flow(print_shop_document):
    """
    GIVEN the print shop graph saved by the builder
    WHEN a respondent picks Printing, Color, 5 copies and uploads a file
    THEN the transcript has four ordered entries and the quantity is 5
    """
    # Arrange
    interpreter = ConversationInterpreter(resolve_script(print_shop_document))

    # Act
    transcript = _run(interpreter, ["Printing", "Color", "5", "flyer.pdf"])

    # Assert
    assert [(e.question, e.answer, e.type) for e in transcript] == [
        ("What service?", "Printing", "choice"),
        ("What type of printing?", "Color", "choice"),
        ("How many copies?", "5", "number"),
        ("Upload your document", "flyer.pdf", "file"),
    ]
    details = extract(transcript)
    assert details.quantity == 5
    assert details.details == (
        "What service?: Printing; What type of printing?: Color; "
        "How many copies?: 5; Upload your document: flyer.pdf"
    )


def test_compiled_flow_ends_at_generated_terminal(print_shop_script):
    interpreter = ConversationInterpreter(print_shop_script)

    state = interpreter.advance(interpreter.start(), "Scanning")

    assert state.node_id == FINISH_NODE_ID
    assert state.complete is True


def test_fallback_flow_to_order_line():
    # Arrange
    interpreter = ConversationInterpreter(resolve_script(None, "Printing", "Copy Corner"))

    # Act
    transcript = _run(interpreter, ["Printing", "Color", "5", "flyer.pdf"])
    line = build_order_line("Printing", 0.5, transcript)

    # Assert
    assert len(transcript) == 4
    assert transcript[0].question.startswith("Welcome to Copy Corner!")
    assert line.quantity == 5
    assert line.total_amount == pytest.approx(2.5)
    assert line.line_item.name.startswith("Printing (Welcome to Copy Corner!")


def test_request_response_turns_replay_the_same_session():
    """Each turn carries the whole transcript; the interpreter keeps nothing."""
    # Arrange
    interpreter = ConversationInterpreter(default_script())
    transcript: list = []

    # Act
    for answer in ["Binding", "Spiral"]:
        result = interpreter.turn(transcript, answer)
        transcript = result.transcript

    # Assert
    assert result.complete is True
    assert result.prompt.text == "Great! We have your details. Place Order Now?"
    assert [e.answer for e in transcript] == ["Binding", "Spiral"]
