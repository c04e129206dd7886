"""
Tests for the command-line entry point, settings and the text interface.
"""

import pytest

from ai_interviewer.config import Settings
from ai_interviewer.errors import DocumentError
from ai_interviewer.io.documents import read_document
from ai_interviewer.io.text_interface import TextInterface
from ai_interviewer.main import build_parser
from ai_interviewer.models.llm_client import MockCompletionClient, PromptKind
from ai_interviewer.orchestrator.interview_orchestrator import InterviewOrchestrator
from ai_interviewer.orchestrator.schemas import SessionStatus


class TestArgumentParser:
    """Tests for build_parser."""

    def test_defaults(self) -> None:
        args = build_parser().parse_args([])

        assert args.mode == "text"
        assert args.resume is None
        assert args.job is None
        assert not args.persist
        assert not args.mock
        assert args.host == "127.0.0.1"
        assert args.port == 3001

    def test_api_mode(self) -> None:
        args = build_parser().parse_args(["--mode", "api", "--port", "8080", "--mock"])

        assert args.mode == "api"
        assert args.port == 8080
        assert args.mock

    def test_invalid_mode_exits(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--mode", "voice"])


class TestSettings:
    """Tests for environment-driven settings."""

    def test_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("OPENROUTER_API_KEY", "sk-env")
        monkeypatch.setenv("LLM_MODEL_NAME", "anthropic/some-model")
        monkeypatch.setenv("MOCK_COMPLETIONS", "true")
        monkeypatch.setenv("LLM_TIMEOUT", "30")

        config = Settings(_env_file=None).completion_config()

        assert config.api_key == "sk-env"
        assert config.model == "anthropic/some-model"
        assert config.mock_completions
        assert config.timeout == 30

    def test_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
        monkeypatch.delenv("MOCK_COMPLETIONS", raising=False)

        settings = Settings(_env_file=None)

        assert settings.openrouter_api_key == ""
        assert not settings.mock_completions
        assert settings.summary_target_tokens == 700
        assert settings.feedback_max_tokens == 500
        assert settings.llm_max_tokens == 100


def _feed_input(monkeypatch, lines: list[str]) -> None:
    remaining = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


class TestTextInterface:
    """Tests for the terminal interview loop."""

    @pytest.mark.asyncio
    async def test_runs_until_interviewer_ends(self, monkeypatch, capsys, store, resume_text, job_description_text) -> None:
        orchestrator = InterviewOrchestrator(llm_client=MockCompletionClient(turns_before_end=2), store=store)
        interface = TextInterface(orchestrator, resume_text=resume_text, job_description_text=job_description_text)
        _feed_input(monkeypatch, ["First answer", "Second answer"])

        await interface.run()

        output = capsys.readouterr().out
        assert "Interview Feedback" in output
        assert "(Mock AI) Overall, a good interview." in output
        session = await store.get(_only_id(store))
        assert session.status == SessionStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_end_command_finishes_early(
        self, monkeypatch, capsys, llm, store, synthesizer, resume_text, job_description_text
    ) -> None:
        orchestrator = InterviewOrchestrator(llm_client=llm, store=store, feedback_synthesizer=synthesizer)
        interface = TextInterface(orchestrator, resume_text=resume_text, job_description_text=job_description_text)
        _feed_input(monkeypatch, ["An answer", "quit"])

        await interface.run()

        assert synthesizer.call_count == 1
        assert len(llm.calls_for(PromptKind.FOLLOW_UP)) == 1
        assert synthesizer.feedback in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_empty_documents_do_not_start(self, monkeypatch, capsys, llm, store) -> None:
        orchestrator = InterviewOrchestrator(llm_client=llm, store=store)
        interface = TextInterface(orchestrator)
        _feed_input(monkeypatch, [])

        await interface.run()

        assert "Could not start the interview" in capsys.readouterr().out
        assert store.created == []

    @pytest.mark.asyncio
    async def test_unreadable_file_prompts_again(
        self, monkeypatch, capsys, tmp_path, llm, store, synthesizer
    ) -> None:
        """Test that a bad document path is reported and the prompt repeats."""
        bad_file = tmp_path / "resume.pdf"
        bad_file.write_bytes(b"\xff\xfe\x00%PDF-1.7 binary")
        orchestrator = InterviewOrchestrator(llm_client=llm, store=store, feedback_synthesizer=synthesizer)
        interface = TextInterface(orchestrator)
        _feed_input(
            monkeypatch,
            [str(bad_file), "Pasted resume text", "", "Pasted job description", "", "quit"],
        )

        await interface.run()

        assert "Could not read that file" in capsys.readouterr().out
        session = await store.get(_only_id(store))
        assert session.resume_text == "Pasted resume text"
        assert session.job_description_text == "Pasted job description"
        assert session.status == SessionStatus.COMPLETED


def _only_id(store) -> str:
    [interview_id] = list(store._sessions)
    return interview_id


class TestReadDocument:
    """Tests for loading resumes and job descriptions from disk."""

    def test_reads_text_file(self, tmp_path) -> None:
        path = tmp_path / "resume.txt"
        path.write_text("  Jane Doe\nPython engineer\n", encoding="utf-8")

        assert read_document(path) == "Jane Doe\nPython engineer"

    def test_reads_docx_paragraphs(self, tmp_path) -> None:
        from docx import Document

        path = tmp_path / "job.docx"
        doc = Document()
        doc.add_paragraph("Staff Engineer")
        doc.add_paragraph("")
        doc.add_paragraph("Python and Kafka")
        doc.save(str(path))

        assert read_document(path) == "Staff Engineer\nPython and Kafka"

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            read_document(tmp_path / "missing.txt")

    def test_non_utf8_file(self, tmp_path) -> None:
        path = tmp_path / "resume.pdf"
        path.write_bytes(b"\xff\xfe\x00binary")

        with pytest.raises(DocumentError):
            read_document(path)

    def test_corrupt_docx(self, tmp_path) -> None:
        path = tmp_path / "resume.docx"
        path.write_bytes(b"this is not a zip archive")

        with pytest.raises(DocumentError):
            read_document(path)
