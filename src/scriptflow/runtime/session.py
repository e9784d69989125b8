"""Session value types for the conversation interpreter."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scriptflow.script.models import RuntimeOption

# Transcript entry type for an answer picked from options
CHOICE_ANSWER = "choice"

Answer = str | int | float


class TranscriptEntry(BaseModel):
    """One answered question, in traversal order."""

    model_config = ConfigDict(frozen=True)

    question: str = ""
    answer: Answer = ""
    type: str | None = None

    @field_validator("question", "answer", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        # Stored transcripts may carry null for a blank question or answer
        return "" if value is None else value


class SessionState(BaseModel):
    """Cursor of one respondent's traversal.

    Immutable: advancing a session returns a new state, so the same
    transcript always reproduces the same state.
    """

    model_config = ConfigDict(frozen=True)

    node_id: str
    transcript: tuple[TranscriptEntry, ...] = ()
    complete: bool = False


class Prompt(BaseModel):
    """What to present to the respondent for the current node."""

    node_id: str
    text: str
    options: list[RuntimeOption] | None = None
    input_type: str | None = None
    is_final: bool = False


class TurnResult(BaseModel):
    """Outcome of one interpreter turn."""

    prompt: Prompt
    transcript: list[TranscriptEntry] = Field(default_factory=list)
    complete: bool = False
