"""Turn-based interpreter driving a conversation through a RuntimeScript.

The interpreter holds no session state of its own. Each turn receives the
prior transcript (or a SessionState cursor) and returns the next state, so any
number of sessions can run against one script concurrently.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from scriptflow.core.errors import (
    InvalidAnswerError,
    ScriptError,
    SessionCompleteError,
    StuckTransitionError,
    UnknownNodeError,
)
from scriptflow.observability.logging import ContextLogger
from scriptflow.runtime.session import (
    CHOICE_ANSWER,
    Answer,
    Prompt,
    SessionState,
    TranscriptEntry,
    TurnResult,
)
from scriptflow.script.models import RuntimeNode, RuntimeOption, RuntimeScript

_context_logger = ContextLogger(__name__)

# Zero-based option index typed as text; ASCII digits only
_OPTION_INDEX = re.compile(r"\d+", re.ASCII)


class ConversationInterpreter:
    """State machine over the nodes of a runtime script."""

    def __init__(self, script: RuntimeScript):
        """
        Initialize the interpreter.

        Args:
            script: Compiled script; it is never modified

        Raises:
            ScriptError: If the script has no resolvable start node
        """
        if not script.is_usable():
            raise ScriptError(
                "Script has no resolvable start node", start_node_id=script.start_node_id
            )
        self.script = script

    def node(self, node_id: str) -> RuntimeNode:
        """Look up a node by id."""
        node = self.script.nodes.get(node_id)
        if node is None:
            raise UnknownNodeError("Script has no such node", node_id=node_id)
        return node

    def start(self) -> SessionState:
        """Open a new session at the start node."""
        start_id = self.script.start_node_id
        assert start_id is not None
        return SessionState(node_id=start_id, complete=self.node(start_id).terminal)

    def current_prompt(self, state: SessionState) -> Prompt:
        """Describe the node the respondent should see next."""
        node = self.node(state.node_id)
        return Prompt(
            node_id=state.node_id,
            text=node.text,
            options=node.options,
            input_type=node.input_type,
            is_final=node.terminal,
        )

    def advance(self, state: SessionState, answer: Answer | None) -> SessionState:
        """Record an answer for the current node and move to the next one.

        Args:
            state: Current session cursor
            answer: Option value (or label, or index) for choice nodes; the raw
                value for free-form nodes

        Returns:
            New session state

        Raises:
            SessionCompleteError: If the session already reached a final node
            InvalidAnswerError: If the answer matches no option or is missing
            StuckTransitionError: If the chosen path has no continuation
            UnknownNodeError: If the continuation is not in the script
        """
        log = _context_logger.with_context(node_id=state.node_id, turn=len(state.transcript))
        if state.complete:
            raise SessionCompleteError("Session is already complete", node_id=state.node_id)

        node = self.node(state.node_id)
        if node.terminal:
            raise SessionCompleteError("Session is already complete", node_id=state.node_id)

        entry: TranscriptEntry | None = None
        if node.options:
            option = self._match_option(node, answer, state.node_id)
            entry = TranscriptEntry(question=node.text, answer=option.value, type=CHOICE_ANSWER)
            target = option.next
        elif node.input_type:
            if answer is None:
                raise InvalidAnswerError("An answer is required", node_id=state.node_id)
            entry = TranscriptEntry(question=node.text, answer=answer, type=node.input_type)
            target = node.next
        else:
            # Informational step: acknowledged without an answer
            target = node.next

        if not target:
            log.error("Selected path has no continuation")
            raise StuckTransitionError("Selected path has no continuation", node_id=state.node_id)

        next_node = self.node(target)
        transcript = state.transcript if entry is None else (*state.transcript, entry)
        log.debug(f"Advancing to '{target}'")
        return SessionState(node_id=target, transcript=transcript, complete=next_node.terminal)

    def replay(self, transcript: Iterable[TranscriptEntry | Mapping[str, Any]]) -> SessionState:
        """Rebuild the session state a transcript leads to.

        Raises:
            InvalidAnswerError: If an entry does not belong to the node it replays
        """
        state = self.start()
        for raw in transcript:
            entry = raw if isinstance(raw, TranscriptEntry) else TranscriptEntry.model_validate(raw)
            state = self._skip_informational(state)
            node = self.node(state.node_id)
            if entry.question != node.text:
                raise InvalidAnswerError(
                    "Transcript does not match script",
                    node_id=state.node_id,
                    question=entry.question,
                )
            state = self.advance(state, entry.answer)
        return state

    def turn(
        self,
        transcript: Iterable[TranscriptEntry | Mapping[str, Any]] = (),
        answer: Answer | None = None,
    ) -> TurnResult:
        """Replay a transcript, apply an optional new answer, and report the next prompt.

        Informational steps are passed through on both sides of the answer, so
        the reported prompt always asks for something or is final.
        """
        state = self._skip_informational(self.replay(transcript))
        if answer is not None:
            state = self._skip_informational(self.advance(state, answer))
        return TurnResult(
            prompt=self.current_prompt(state),
            transcript=list(state.transcript),
            complete=state.complete,
        )

    def _skip_informational(self, state: SessionState) -> SessionState:
        node = self.node(state.node_id)
        visited = {state.node_id}
        while not state.complete and not node.options and not node.input_type:
            state = self.advance(state, None)
            if state.node_id in visited:
                raise StuckTransitionError("Informational steps form a loop", node_id=state.node_id)
            visited.add(state.node_id)
            node = self.node(state.node_id)
        return state

    @staticmethod
    def _match_option(node: RuntimeNode, answer: Answer | None, node_id: str) -> RuntimeOption:
        options = node.options or []

        if isinstance(answer, str):
            for option in options:
                if option.value == answer:
                    return option
            for option in options:
                if option.label == answer:
                    return option
            if _OPTION_INDEX.fullmatch(answer.strip()):
                answer = int(answer.strip())

        if isinstance(answer, int) and not isinstance(answer, bool):
            if 0 <= answer < len(options):
                return options[answer]

        raise InvalidAnswerError("Answer matches no option", node_id=node_id, answer=answer)
