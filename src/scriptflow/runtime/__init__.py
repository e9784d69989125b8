"""Conversation interpreter."""

from scriptflow.runtime.interpreter import ConversationInterpreter
from scriptflow.runtime.session import Prompt, SessionState, TranscriptEntry, TurnResult

__all__ = ["ConversationInterpreter", "Prompt", "SessionState", "TranscriptEntry", "TurnResult"]
