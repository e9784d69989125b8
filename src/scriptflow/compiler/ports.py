"""Port strategies: per input kind, which ports a question exposes, how it
materializes as a runtime node, and how an edge leaving one of its ports is
routed.

Registry pattern follows the node factory registry: new input kinds are added
by registering a strategy, not by editing the compiler.
"""

import logging
from typing import Protocol

from scriptflow.config.models import MessagesConfig
from scriptflow.graph.models import (
    NEXT_PORT,
    NO_PORT,
    OPTION_PORT_PREFIX,
    YES_PORT,
    InputKind,
    QuestionData,
    option_port,
)
from scriptflow.script.models import INPUT_FILE, INPUT_NUMBER, RuntimeNode, RuntimeOption

logger = logging.getLogger(__name__)


class PortStrategy(Protocol):
    """Behavior of one question input kind."""

    def ports(self, question: QuestionData) -> list[str]:
        """Output port keys, in display order."""
        ...

    def build(self, question: QuestionData, messages: MessagesConfig) -> RuntimeNode:
        """Create the runtime node for a question."""
        ...

    def route(self, node: RuntimeNode, port: str, target: str) -> bool:
        """Point ``port`` of ``node`` at ``target``. False if the port is unknown."""
        ...


def _prompt(question: QuestionData, messages: MessagesConfig) -> str:
    return question.prompt_text or messages.missing_prompt_text


class MultipleChoicePorts:
    """One port per option, keyed by option index (``out_opt_<i>``)."""

    def ports(self, question: QuestionData) -> list[str]:
        return [option_port(index) for index in range(len(question.options))]

    def build(self, question: QuestionData, messages: MessagesConfig) -> RuntimeNode:
        return RuntimeNode(
            text=_prompt(question, messages),
            options=[RuntimeOption(label=opt, value=opt) for opt in question.options],
        )

    def route(self, node: RuntimeNode, port: str, target: str) -> bool:
        if not port.startswith(OPTION_PORT_PREFIX):
            return False
        try:
            index = int(port[len(OPTION_PORT_PREFIX) :])
        except ValueError:
            return False
        if not node.options or not 0 <= index < len(node.options):
            return False
        node.options[index].next = target
        return True


class YesNoPorts:
    """Two fixed ports: ``out_yes`` then ``out_no``."""

    _PORT_INDEX = {YES_PORT: 0, NO_PORT: 1}

    def ports(self, question: QuestionData) -> list[str]:
        return [YES_PORT, NO_PORT]

    def build(self, question: QuestionData, messages: MessagesConfig) -> RuntimeNode:
        return RuntimeNode(
            text=_prompt(question, messages),
            options=[
                RuntimeOption(label="Yes", value="Yes"),
                RuntimeOption(label="No", value="No"),
            ],
        )

    def route(self, node: RuntimeNode, port: str, target: str) -> bool:
        index = self._PORT_INDEX.get(port)
        if index is None or not node.options:
            return False
        node.options[index].next = target
        return True


class SingleExitPorts:
    """Free-form input with a single ``out_next`` port.

    The port key of incoming edges is not checked: any edge leaving the node
    becomes its continuation.
    """

    def __init__(self, input_type: str):
        self.input_type = input_type

    def ports(self, question: QuestionData) -> list[str]:
        return [NEXT_PORT]

    def build(self, question: QuestionData, messages: MessagesConfig) -> RuntimeNode:
        return RuntimeNode(text=_prompt(question, messages), input_type=self.input_type)

    def route(self, node: RuntimeNode, port: str, target: str) -> bool:
        node.next = target
        return True


class InformationalPorts:
    """Question without an input kind: a plain message with no exits."""

    def ports(self, question: QuestionData) -> list[str]:
        return []

    def build(self, question: QuestionData, messages: MessagesConfig) -> RuntimeNode:
        return RuntimeNode(text=question.prompt_text)

    def route(self, node: RuntimeNode, port: str, target: str) -> bool:
        return False


class PortStrategyRegistry:
    """Registry of port strategies keyed by input kind."""

    _strategies: dict[str, PortStrategy] = {}
    _informational: PortStrategy = InformationalPorts()
    # Unknown kinds from older builders behave like a free-text answer
    _fallback: PortStrategy = SingleExitPorts(INPUT_NUMBER)

    @classmethod
    def register(cls, input_kind: str, strategy: PortStrategy) -> None:
        """Register a strategy for an input kind."""
        cls._strategies[input_kind] = strategy

    @classmethod
    def get(cls, input_kind: str | None) -> PortStrategy:
        """Get the strategy for an input kind."""
        if input_kind is None:
            return cls._informational
        strategy = cls._strategies.get(input_kind)
        if strategy is None:
            logger.warning(f"Unknown input kind '{input_kind}', treating it as free text")
            return cls._fallback
        return strategy


PortStrategyRegistry.register(InputKind.MULTIPLE_CHOICE.value, MultipleChoicePorts())
PortStrategyRegistry.register(InputKind.YES_NO.value, YesNoPorts())
PortStrategyRegistry.register(InputKind.NUMBER.value, SingleExitPorts(INPUT_NUMBER))
PortStrategyRegistry.register(InputKind.TEXT_AREA.value, SingleExitPorts(INPUT_NUMBER))
PortStrategyRegistry.register(InputKind.FILE_UPLOAD.value, SingleExitPorts(INPUT_FILE))


def output_ports(question: QuestionData | None) -> list[str]:
    """Port keys a question node exposes for outgoing edges."""
    if question is None:
        return []
    return PortStrategyRegistry.get(question.input_kind).ports(question)
