"""
Main entry point for the AI Interviewer application.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from ai_interviewer.config import Settings, get_settings
from ai_interviewer.db.repository import InMemorySessionStore, SessionStore, SqlSessionStore
from ai_interviewer.io.documents import read_document
from ai_interviewer.io.text_interface import TextInterface
from ai_interviewer.models.llm_client import build_completion_client
from ai_interviewer.orchestrator.interview_orchestrator import InterviewOrchestrator


def setup_logging() -> None:
    """Configure application logging."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(prog="ai-interviewer")
    parser.add_argument(
        "--mode",
        choices=["text", "api"],
        default="text",
        help="Run an interview in the terminal or serve the HTTP API",
    )
    parser.add_argument("--resume", type=Path, help="Path to the resume (.txt or .docx)")
    parser.add_argument("--job", type=Path, help="Path to the job description (.txt or .docx)")
    parser.add_argument(
        "--persist",
        action="store_true",
        help="Store text-mode sessions in the configured database instead of memory",
    )
    parser.add_argument("--mock", action="store_true", help="Use canned offline model replies")
    parser.add_argument("--host", default="127.0.0.1", help="API bind address")
    parser.add_argument("--port", type=int, default=3001, help="API port")
    return parser


def _read_optional(path: Path | None) -> str | None:
    if path is None:
        return None
    return read_document(path)


async def run_interview(args: argparse.Namespace, settings: Settings) -> None:
    """
    Run an interactive interview session in the terminal.

    Initializes the completion client, the session store and the
    orchestrator, then hands control to the text interface.
    """
    logger = logging.getLogger(__name__)

    logger.info("Initializing AI Interviewer...")
    logger.debug(f"Using LLM model: {settings.llm_model_name}")

    llm_client = build_completion_client(settings.completion_config())

    store: SessionStore
    if args.persist:
        sql_store = SqlSessionStore.from_url(settings.database_url)
        await sql_store.create_schema()
        store = sql_store
    else:
        store = InMemorySessionStore()

    orchestrator = InterviewOrchestrator(
        llm_client=llm_client,
        store=store,
        summary_target=settings.summary_target_tokens,
        question_max_tokens=settings.llm_max_tokens,
        feedback_max_tokens=settings.feedback_max_tokens,
    )

    interface = TextInterface(
        orchestrator,
        resume_text=_read_optional(args.resume),
        job_description_text=_read_optional(args.job),
    )

    logger.info("Starting interview session...")
    try:
        await interface.run()
    finally:
        await llm_client.close()
        await store.close()


def serve_api(args: argparse.Namespace, settings: Settings) -> None:
    """Serve the HTTP API with uvicorn."""
    # Lazy import so text mode doesn't require the server.
    import uvicorn

    from ai_interviewer.api.routes import create_app

    uvicorn.run(create_app(settings=settings), host=args.host, port=args.port)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the application."""
    setup_logging()
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)

    settings = get_settings()
    if args.mock:
        settings = settings.model_copy(update={"mock_completions": True})

    try:
        if args.mode == "api":
            serve_api(args, settings)
        else:
            asyncio.run(run_interview(args, settings))
    except KeyboardInterrupt:
        print("\nInterview session terminated by user.")
        sys.exit(0)
    except Exception as e:
        logging.error(f"Application error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
