"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field, field_validator

from counsel_ai.modes import Mode


class AIQueryRequest(BaseModel):
    """Request DTO for an AI query.

    The handler will convert this to a call on the AI gateway.
    """

    prompt: str = Field(..., description="The user prompt", min_length=3, max_length=4000)
    mode: Mode = Field(Mode.CHAT, description="Request profile selecting the system instruction")

    @field_validator("prompt", mode="before")
    @classmethod
    def strip_prompt(cls, v: object) -> object:
        """Trim surrounding whitespace before the length check."""
        return v.strip() if isinstance(v, str) else v


class FeedbackAnalysisRequest(BaseModel):
    """Request DTO for analyzing one piece of feedback."""

    feedback: str = Field(
        ...,
        description="Free-text feedback about a counseling session",
        min_length=10,
        max_length=5000,
    )


class FeedbackSummaryRequest(BaseModel):
    """Request DTO for summarizing several pieces of feedback."""

    feedback: list[str] = Field(
        ...,
        description="Feedback entries to summarize",
        min_length=1,
        max_length=50,
    )
