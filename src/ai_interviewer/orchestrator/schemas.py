"""
Pydantic schemas for the orchestrator module.

Defines data models for interview sessions, transcript turns, and the
payloads returned by orchestrator operations.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


def _now_utc() -> datetime:
    """Get current UTC datetime (timezone-aware)."""
    return datetime.now(timezone.utc)


class Sender(str, Enum):
    """Who produced a transcript turn."""

    AI = "ai"
    USER = "user"


class SessionStatus(str, Enum):
    """Lifecycle status of an interview session."""

    STARTED = "started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Turn(BaseModel):
    """A single message in the interview transcript."""

    sender: Sender = Field(..., description="Who produced the turn")
    text: str = Field(..., description="Content of the turn")
    timestamp: datetime = Field(default_factory=_now_utc, description="When the turn was appended")


class Session(BaseModel):
    """
    Persisted state of one interview.

    The resume and job description are fixed at creation; the transcript only
    grows; feedback is written once, together with the move to COMPLETED.
    """

    interview_id: str = Field(default="", description="Identifier assigned by the store")
    resume_text: str = Field(..., description="Candidate resume text")
    job_description_text: str = Field(..., description="Job description text")
    transcript: list[Turn] = Field(default_factory=list, description="Ordered conversation turns")
    status: SessionStatus = Field(default=SessionStatus.STARTED, description="Lifecycle status")
    feedback: str | None = Field(default=None, description="Final feedback, once generated")
    owner_id: str | None = Field(default=None, description="Caller identity recorded at creation")
    created_at: datetime = Field(default_factory=_now_utc, description="When the session was created")
    updated_at: datetime = Field(default_factory=_now_utc, description="When the session was last written")

    @property
    def is_complete(self) -> bool:
        """Check if the interview has reached its terminal state."""
        return self.status == SessionStatus.COMPLETED

    @property
    def has_feedback(self) -> bool:
        """Check if feedback has been stored."""
        return bool(self.feedback)


class SessionUpdate(BaseModel):
    """Whole-field replacement written to the store in one step."""

    transcript: list[Turn] | None = Field(default=None, description="Complete new transcript")
    status: SessionStatus | None = Field(default=None, description="New status")
    feedback: str | None = Field(default=None, description="Feedback text")


class StartResult(BaseModel):
    """Result of starting an interview."""

    interview_id: str = Field(..., description="Identifier of the new session")
    first_question: str = Field(..., description="Opening interviewer question")


class AnswerResult(BaseModel):
    """Result of submitting a candidate answer. Never carries feedback."""

    next_question: str = Field(..., description="Interviewer reply shown to the candidate")
    should_end: bool = Field(default=False, description="Whether the interviewer ended the interview")


class EndResult(BaseModel):
    """Result of ending an interview. Feedback is fetched separately."""

    interview_id: str = Field(..., description="Identifier of the completed session")


class FeedbackResult(BaseModel):
    """Stored feedback for a completed interview."""

    interview_id: str = Field(..., description="Identifier of the session")
    feedback: str = Field(..., description="Final feedback text")
