"""
Orchestrator module for managing interview flow and session state.

The orchestrator itself lives in
``ai_interviewer.orchestrator.interview_orchestrator``; this package root
only re-exports the leaf modules so agents can import schemas without
pulling the orchestrator in.
"""

from ai_interviewer.orchestrator.response_parser import (
    END_INTERVIEW_MARKER,
    ModelReply,
    ReplyKind,
    parse_reply,
)
from ai_interviewer.orchestrator.schemas import (
    AnswerResult,
    EndResult,
    FeedbackResult,
    Sender,
    Session,
    SessionStatus,
    SessionUpdate,
    StartResult,
    Turn,
)
from ai_interviewer.orchestrator.transcript import append_turn, to_chat_messages

__all__ = [
    "AnswerResult",
    "END_INTERVIEW_MARKER",
    "EndResult",
    "FeedbackResult",
    "ModelReply",
    "ReplyKind",
    "Sender",
    "Session",
    "SessionStatus",
    "SessionUpdate",
    "StartResult",
    "Turn",
    "append_turn",
    "parse_reply",
    "to_chat_messages",
]
