"""API Models - Pydantic models for FastAPI endpoints.

Request and response bodies use the camelCase keys of the stored documents.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from scriptflow.runtime.session import Answer, Prompt, TranscriptEntry


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "starting"]
    version: str
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())


class CompileResponse(BaseModel):
    """Compiled runtime script and whether it can be run as is."""

    script: dict[str, Any] = Field(description="Runtime script document")
    usable: bool = Field(description="True when the script has a resolvable start node")
    problems: list[str] = Field(default_factory=list, description="Dangling references")


class ResolveRequest(_CamelModel):
    """Stored service script to resolve for a chat session."""

    script: dict[str, Any] | str | None = Field(default=None, description="Stored script")
    service_name: str | None = Field(default=None, alias="serviceName")
    business_name: str | None = Field(default=None, alias="businessName")


class ResolveResponse(BaseModel):
    """Script the chat session will run."""

    script: dict[str, Any]
    fallback: bool = Field(description="True when the fallback script was substituted")


class TurnRequest(_CamelModel):
    """One conversation turn: prior transcript plus an optional new answer."""

    script: dict[str, Any] = Field(description="Runtime script document")
    transcript: list[TranscriptEntry] = Field(default_factory=list)
    answer: Answer | None = Field(default=None, description="Newly submitted answer")


class TurnResponse(BaseModel):
    """Next prompt and the updated transcript."""

    prompt: Prompt
    transcript: list[TranscriptEntry]
    complete: bool


class LineItemRequest(_CamelModel):
    """Finished chat to turn into an order line."""

    service_name: str = Field(min_length=1, alias="serviceName")
    service_price: float = Field(ge=0, alias="servicePrice")
    answers: list[TranscriptEntry] | None = None
    summary: str | None = None
