"""
Tests for the session stores.
"""

import pytest

from ai_interviewer.db.repository import InMemorySessionStore, SqlSessionStore
from ai_interviewer.errors import NotFoundError, StoreError
from ai_interviewer.orchestrator.schemas import Sender, Session, SessionStatus, SessionUpdate
from ai_interviewer.orchestrator.transcript import append_turn


def _new_session() -> Session:
    return Session(
        resume_text="resume",
        job_description_text="job description",
        transcript=append_turn([], Sender.AI, "Opening question?"),
        owner_id="owner-1",
    )


class TestInMemorySessionStore:
    """Tests for InMemorySessionStore."""

    @pytest.mark.asyncio
    async def test_create_assigns_unique_ids(self) -> None:
        store = InMemorySessionStore()

        first = await store.create(_new_session())
        second = await store.create(_new_session())

        assert first != second
        assert len(store) == 2
        loaded = await store.get(first)
        assert loaded.interview_id == first
        assert loaded.owner_id == "owner-1"

    @pytest.mark.asyncio
    async def test_get_returns_a_copy(self) -> None:
        store = InMemorySessionStore()
        interview_id = await store.create(_new_session())

        loaded = await store.get(interview_id)
        loaded.transcript.append(loaded.transcript[0])

        assert len((await store.get(interview_id)).transcript) == 1

    @pytest.mark.asyncio
    async def test_update_replaces_only_given_fields(self) -> None:
        store = InMemorySessionStore()
        interview_id = await store.create(_new_session())
        before = await store.get(interview_id)

        await store.update(interview_id, SessionUpdate(status=SessionStatus.IN_PROGRESS))

        after = await store.get(interview_id)
        assert after.status == SessionStatus.IN_PROGRESS
        assert after.transcript == before.transcript
        assert after.feedback is None
        assert after.updated_at >= before.updated_at

    @pytest.mark.asyncio
    async def test_update_replaces_transcript_wholesale(self) -> None:
        store = InMemorySessionStore()
        interview_id = await store.create(_new_session())
        session = await store.get(interview_id)
        transcript = append_turn(session.transcript, Sender.USER, "answer")

        await store.update(
            interview_id,
            SessionUpdate(transcript=transcript, status=SessionStatus.COMPLETED, feedback="done"),
        )

        after = await store.get(interview_id)
        assert [t.text for t in after.transcript] == ["Opening question?", "answer"]
        assert after.transcript[1].sender == Sender.USER
        assert after.status == SessionStatus.COMPLETED
        assert after.feedback == "done"

    @pytest.mark.asyncio
    async def test_missing_id(self) -> None:
        store = InMemorySessionStore()

        with pytest.raises(NotFoundError):
            await store.get("nope")
        with pytest.raises(NotFoundError):
            await store.update("nope", SessionUpdate(feedback="x"))


class TestSqlSessionStore:
    """Tests for SqlSessionStore against a temporary SQLite file."""

    @pytest.mark.asyncio
    async def test_round_trip(self, tmp_path) -> None:
        store = SqlSessionStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
        await store.create_schema()
        try:
            interview_id = await store.create(_new_session())

            loaded = await store.get(interview_id)
            assert loaded.interview_id == interview_id
            assert loaded.resume_text == "resume"
            assert loaded.status == SessionStatus.STARTED
            assert loaded.owner_id == "owner-1"
            assert loaded.transcript[0].sender == Sender.AI
            assert loaded.transcript[0].text == "Opening question?"
        finally:
            await store.close()

    @pytest.mark.asyncio
    async def test_update_persists_fields(self, tmp_path) -> None:
        store = SqlSessionStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
        await store.create_schema()
        try:
            interview_id = await store.create(_new_session())
            session = await store.get(interview_id)
            transcript = append_turn(session.transcript, Sender.USER, "My answer")

            await store.update(interview_id, SessionUpdate(transcript=transcript, status=SessionStatus.IN_PROGRESS))
            await store.update(interview_id, SessionUpdate(feedback="Good fit", status=SessionStatus.COMPLETED))

            loaded = await store.get(interview_id)
            assert [t.sender for t in loaded.transcript] == [Sender.AI, Sender.USER]
            assert loaded.status == SessionStatus.COMPLETED
            assert loaded.feedback == "Good fit"
        finally:
            await store.close()

    @pytest.mark.asyncio
    async def test_missing_id(self, tmp_path) -> None:
        store = SqlSessionStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
        await store.create_schema()
        try:
            with pytest.raises(NotFoundError):
                await store.get("nope")
            with pytest.raises(NotFoundError):
                await store.update("nope", SessionUpdate(feedback="x"))
        finally:
            await store.close()

    @pytest.mark.asyncio
    async def test_database_errors_become_store_errors(self, tmp_path) -> None:
        """Test that driver failures surface as StoreError on every call."""
        store = SqlSessionStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'no_schema.db'}")
        try:
            with pytest.raises(StoreError):
                await store.get("abc")
            with pytest.raises(StoreError):
                await store.create(_new_session())
            with pytest.raises(StoreError):
                await store.update("abc", SessionUpdate(feedback="x"))
        finally:
            await store.close()

