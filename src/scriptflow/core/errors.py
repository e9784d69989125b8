"""Custom exception hierarchy for Scriptflow.

All errors inherit from ScriptflowError and accept keyword context that is
rendered into the message as ``key=value`` pairs.
"""

from typing import Any


class ScriptflowError(Exception):
    """Base class for all Scriptflow errors."""

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.context = context
        super().__init__(message)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class ConfigError(ScriptflowError):
    """Raised when configuration is invalid."""


class GraphError(ScriptflowError):
    """Raised when a builder document cannot be read or an edit is rejected."""


class ScriptError(ScriptflowError):
    """Raised when a stored runtime script document is malformed."""


class InterpreterError(ScriptflowError):
    """Raised when a conversation cannot advance."""


class StuckTransitionError(InterpreterError):
    """Selected answer leads nowhere: the script is corrupt."""


class UnknownNodeError(InterpreterError):
    """A transition references a node that is not in the script."""


class InvalidAnswerError(InterpreterError):
    """The submitted answer does not fit the current node."""


class SessionCompleteError(InterpreterError):
    """An answer was submitted after the session reached a terminal node."""
