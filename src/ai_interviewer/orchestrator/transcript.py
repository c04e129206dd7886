"""
Transcript log helpers.

The transcript is treated as an immutable log: appending returns a new list,
and prompts are built from a projection of the log onto chat roles.
"""

from ai_interviewer.models.llm_client import Message
from ai_interviewer.orchestrator.schemas import Sender, Turn

_ROLE_BY_SENDER = {
    Sender.AI: "assistant",
    Sender.USER: "user",
}


def append_turn(transcript: list[Turn], sender: Sender, text: str) -> list[Turn]:
    """
    Return a new transcript with one turn appended.

    Args:
        transcript: Existing turns (left untouched).
        sender: Who produced the new turn.
        text: Content of the new turn.

    Returns:
        A new list ending with the appended turn.
    """
    return [*transcript, Turn(sender=sender, text=text)]


def to_chat_messages(transcript: list[Turn]) -> list[Message]:
    """Project turns onto assistant/user chat messages, in order."""
    return [Message(role=_ROLE_BY_SENDER[turn.sender], content=turn.text) for turn in transcript]


def count_answers(transcript: list[Turn]) -> int:
    """Count the candidate turns in a transcript."""
    return sum(1 for turn in transcript if turn.sender == Sender.USER)
