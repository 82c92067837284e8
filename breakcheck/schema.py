"""Schema contract for chat-completion payloads and review outcomes."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MessageRole(StrEnum):
    """Conversation roles sent to the analysis service."""

    SYSTEM = "system"
    USER = "user"


class ReviewStatus(StrEnum):
    """Terminal state of a successful review run."""

    OK = "ok"
    NO_CHANGES = "no_changes"


class ChatMessage(BaseModel):
    """One message of the request conversation."""

    model_config = ConfigDict(extra="forbid")

    role: MessageRole
    content: str


class ChatCompletionRequest(BaseModel):
    """Request body for the chat-completion endpoint."""

    model_config = ConfigDict(extra="forbid")

    model: str = Field(min_length=1)
    messages: list[ChatMessage] = Field(min_length=1)
    temperature: float = Field(ge=0.0, le=2.0)


class CompletionMessage(BaseModel):
    """Message carried by one completion choice."""

    content: str


class CompletionChoice(BaseModel):
    """One candidate completion."""

    message: CompletionMessage


class ChatCompletionResponse(BaseModel):
    """Subset of the chat-completion response the reviewer relies on."""

    choices: list[CompletionChoice]


class ReviewStats(BaseModel):
    """Rollup metrics for one review run."""

    model_config = ConfigDict(extra="forbid")

    files_listed: int = Field(default=0, ge=0)
    files_skipped: int = Field(default=0, ge=0)
    prompt_chars: int = Field(default=0, ge=0)
    llm_calls: int = Field(default=0, ge=0)
    latency_seconds_llm: float = Field(default=0.0, ge=0.0)
    model_used: str | None = None


class ReviewOutcome(BaseModel):
    """Result of one pass through the review pipeline."""

    model_config = ConfigDict(extra="forbid")

    status: ReviewStatus
    analysis: str | None = None
    files_reviewed: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    stats: ReviewStats = Field(default_factory=ReviewStats)

    @model_validator(mode="after")
    def validate_analysis_presence(self) -> ReviewOutcome:
        """Require analysis text exactly when the review reached the service."""
        if self.status is ReviewStatus.OK and self.analysis is None:
            raise ValueError("analysis is required when status is 'ok'")
        if self.status is ReviewStatus.NO_CHANGES and self.analysis is not None:
            raise ValueError("analysis must be empty when status is 'no_changes'")
        return self
