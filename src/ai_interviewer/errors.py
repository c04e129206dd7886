"""
Exception hierarchy for interview operations.

Model backend failures (UpstreamError) live next to the completion client
and are recovered inside the orchestrator; everything here reaches callers.
"""

from ai_interviewer.models.llm_client import UpstreamError


class InterviewError(Exception):
    """Base class for errors surfaced by interview operations."""


class ValidationError(InterviewError):
    """A required input was missing or empty. Nothing was written."""


class NotFoundError(InterviewError):
    """No session exists for the given interview id."""

    def __init__(self, interview_id: str) -> None:
        super().__init__(f"Interview session not found: {interview_id}")
        self.interview_id = interview_id


class NotReadyError(InterviewError):
    """Feedback has not been generated for the session yet."""

    def __init__(self, interview_id: str) -> None:
        super().__init__(f"Feedback not yet available for interview: {interview_id}")
        self.interview_id = interview_id


class InterviewClosedError(InterviewError):
    """The session is completed and accepts no further answers."""

    def __init__(self, interview_id: str) -> None:
        super().__init__(f"Interview has already been completed: {interview_id}")
        self.interview_id = interview_id


class StoreError(InterviewError):
    """The session store failed to read or write."""


class DocumentError(InterviewError):
    """A resume or job description file could not be read."""


__all__ = [
    "InterviewError",
    "ValidationError",
    "NotFoundError",
    "NotReadyError",
    "InterviewClosedError",
    "StoreError",
    "DocumentError",
    "UpstreamError",
]
