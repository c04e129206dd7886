"""
Shared fixtures: a scripted completion client, a spying session store and
a counting feedback synthesizer.
"""

from dataclasses import dataclass, field
from typing import Callable

import pytest

from ai_interviewer.db.repository import InMemorySessionStore
from ai_interviewer.errors import StoreError
from ai_interviewer.models.llm_client import CompletionClientBase, Message, PromptKind
from ai_interviewer.orchestrator.schemas import Session, SessionUpdate, Turn

DEFAULT_REPLIES: dict[PromptKind | None, str] = {
    PromptKind.SUMMARY: "Condensed summary.",
    PromptKind.OPENING: "What drew you to this role?",
    PromptKind.FOLLOW_UP: "Can you walk me through a recent project?",
    PromptKind.FEEDBACK: "Strong fit. Clear answers backed by concrete examples.",
    None: "ok",
}


@dataclass
class RecordedCall:
    purpose: PromptKind | None
    messages: list[Message]
    max_tokens: int


class ScriptedLLM(CompletionClientBase):
    """Replies from per-purpose queues; the last queued item repeats."""

    def __init__(self, replies: dict[PromptKind, list[str | Exception]] | None = None) -> None:
        self._replies = {kind: list(items) for kind, items in (replies or {}).items()}
        self.calls: list[RecordedCall] = []

    def calls_for(self, purpose: PromptKind) -> list[RecordedCall]:
        return [call for call in self.calls if call.purpose == purpose]

    async def complete(self, messages, *, model=None, max_tokens=100, purpose=None):
        self.calls.append(RecordedCall(purpose=purpose, messages=list(messages), max_tokens=max_tokens))

        queue = self._replies.get(purpose)
        if queue:
            reply = queue.pop(0) if len(queue) > 1 else queue[0]
        else:
            reply = DEFAULT_REPLIES[purpose]

        if isinstance(reply, Exception):
            raise reply
        return reply


class SpyStore(InMemorySessionStore):
    """In-memory store that records calls and can be told to fail writes."""

    def __init__(self) -> None:
        super().__init__()
        self.created: list[Session] = []
        self.updates: list[tuple[str, SessionUpdate]] = []
        self.fail_updates = False

    async def create(self, session: Session) -> str:
        self.created.append(session)
        return await super().create(session)

    async def update(self, interview_id: str, update: SessionUpdate) -> None:
        if self.fail_updates:
            raise StoreError("database unavailable")
        self.updates.append((interview_id, update))
        await super().update(interview_id, update)


@dataclass
class CountingSynthesizer:
    """Stands in for FeedbackSynthesizer and records each call's transcript."""

    feedback: str = "Potential fit with gaps in system design."
    transcripts: list[list[Turn]] = field(default_factory=list)

    @property
    def call_count(self) -> int:
        return len(self.transcripts)

    async def synthesize(self, resume_text: str, job_description_text: str, transcript: list[Turn]) -> str:
        self.transcripts.append(list(transcript))
        return self.feedback


@pytest.fixture
def make_llm() -> Callable[..., ScriptedLLM]:
    """Factory for scripted completion clients."""
    return ScriptedLLM


@pytest.fixture
def llm() -> ScriptedLLM:
    """A completion client with default replies."""
    return ScriptedLLM()


@pytest.fixture
def store() -> SpyStore:
    """An empty spying in-memory store."""
    return SpyStore()


@pytest.fixture
def synthesizer() -> CountingSynthesizer:
    """A feedback synthesizer that counts its calls."""
    return CountingSynthesizer()


@pytest.fixture
def resume_text() -> str:
    return (
        "Jane Doe. Senior backend engineer, 2018-2024 at Acme Corp. "
        "Python, PostgreSQL, Kubernetes. Led the billing migration."
    )


@pytest.fixture
def job_description_text() -> str:
    return (
        "Staff Engineer, Payments. Requires 6+ years of Python, "
        "distributed systems experience and ownership of production services."
    )
