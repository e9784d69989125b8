"""Configuration models for Scriptflow."""

from typing import Literal

from pydantic import BaseModel, Field

# Config document version constants
SUPPORTED_VERSIONS = frozenset({"1.0"})
CURRENT_VERSION = "1.0"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class MessagesConfig(BaseModel):
    """Canned texts the compiler and extractor fall back to."""

    finish_text: str = Field(
        default="Thank you! Your request is ready to be placed.",
        description="Text of the synthetic terminal node",
    )
    completion_text: str = Field(
        default="Complete.", description="Text of an empty informational end step"
    )
    missing_prompt_text: str = Field(
        default="...", description="Prompt used when a question has no text"
    )
    legacy_details_fallback: str = Field(
        default="Custom Request", description="Order details when the summary is empty"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO", description="Log level for scriptflow loggers")
    json_file: str | None = Field(
        default=None, description="Optional path of a rotating JSON log file"
    )


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")


class Settings(BaseModel):
    """Runtime settings for Scriptflow."""

    messages: MessagesConfig = Field(default_factory=MessagesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


class ScriptflowConfig(BaseModel):
    """Root configuration with document versioning."""

    version: str = Field(default=CURRENT_VERSION, description="Config document version")
    settings: Settings = Field(default_factory=Settings)

    def model_post_init(self, __context: object) -> None:
        """Validate document version after initialization."""
        if self.version not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported config version: {self.version}. "
                f"Supported: {', '.join(sorted(SUPPORTED_VERSIONS))}"
            )
