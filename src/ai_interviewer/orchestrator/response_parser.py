"""
Interviewer reply parsing.

The model ends an interview by starting its reply with a reserved marker.
Only a literal prefix counts; a marker anywhere else is ordinary text.
"""

from enum import Enum

from pydantic import BaseModel, Field

END_INTERVIEW_MARKER = "[END_INTERVIEW]"

DEFAULT_CLOSING = "Thank you for your time. We will get back to you after evaluation."
DEFAULT_FOLLOW_UP = "Can you elaborate on that?"


class ReplyKind(str, Enum):
    """Kind of interviewer reply."""

    QUESTION = "question"
    TERMINATION = "termination"


class ModelReply(BaseModel):
    """An interviewer reply, tagged by whether it ends the interview."""

    kind: ReplyKind = Field(..., description="Question or termination")
    text: str = Field(..., description="Text shown to the candidate")

    @property
    def ends_interview(self) -> bool:
        """Check if this reply closes the interview."""
        return self.kind == ReplyKind.TERMINATION


def parse_reply(raw: str | None) -> ModelReply:
    """
    Interpret raw model output.

    Args:
        raw: Assistant text as returned by the completion client.

    Returns:
        A TERMINATION reply carrying the closing remark (or the default
        closing when the remark is empty), otherwise a QUESTION reply
        carrying the trimmed text (or the default follow-up when empty).
    """
    text = (raw or "").strip()

    if text.startswith(END_INTERVIEW_MARKER):
        closing = text[len(END_INTERVIEW_MARKER):].strip()
        return ModelReply(kind=ReplyKind.TERMINATION, text=closing or DEFAULT_CLOSING)

    return ModelReply(kind=ReplyKind.QUESTION, text=text or DEFAULT_FOLLOW_UP)
