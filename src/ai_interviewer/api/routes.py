"""FastAPI routes for interview session control."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ai_interviewer.api.schemas import (
    ChatReq,
    ChatResp,
    EndReq,
    EndResp,
    FeedbackResp,
    StartReq,
    StartResp,
)
from ai_interviewer.config import Settings, get_settings
from ai_interviewer.db.repository import SqlSessionStore
from ai_interviewer.errors import (
    InterviewClosedError,
    NotFoundError,
    NotReadyError,
    StoreError,
    ValidationError,
)
from ai_interviewer.models.llm_client import build_completion_client
from ai_interviewer.orchestrator.interview_orchestrator import InterviewOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/interview")


def get_orchestrator(request: Request) -> InterviewOrchestrator:
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(status_code=503, detail="Interview service is not ready.")
    return orchestrator


@router.post("/start", response_model=StartResp)
async def start_interview(
    req: StartReq,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> StartResp:
    if not req.resumeText or not req.jobDescriptionText:
        raise HTTPException(status_code=400, detail="Resume text and Job Description text are required.")
    try:
        started = await orchestrator.start_interview(req.resumeText, req.jobDescriptionText)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except StoreError as exc:
        logger.error(f"Failed to start interview: {exc}")
        raise HTTPException(status_code=500, detail="Failed to start interview") from exc
    return StartResp(interviewId=started.interview_id, firstQuestion=started.first_question)


@router.post("/chat", response_model=ChatResp)
async def chat(
    req: ChatReq,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> ChatResp:
    if not req.interviewId or not req.userAnswer:
        raise HTTPException(status_code=400, detail="Interview ID and user answer are required.")
    try:
        answer = await orchestrator.submit_answer(req.interviewId, req.userAnswer)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Interview session not found.") from exc
    except InterviewClosedError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except StoreError as exc:
        logger.error(f"Failed to process chat message: {exc}")
        raise HTTPException(status_code=500, detail="Failed to process chat message") from exc
    return ChatResp(
        nextQuestion=answer.next_question,
        shouldEnd=answer.should_end,
        interviewId=req.interviewId,
    )


@router.post("/end", response_model=EndResp)
async def end_interview(
    req: EndReq,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> EndResp:
    if not req.interviewId:
        raise HTTPException(status_code=400, detail="Interview ID is required.")
    try:
        ended = await orchestrator.end_interview(req.interviewId)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Interview session not found.") from exc
    except StoreError as exc:
        logger.error(f"Failed to end interview: {exc}")
        raise HTTPException(status_code=500, detail="Failed to end interview") from exc
    return EndResp(interviewId=ended.interview_id)


@router.get("/feedback/{interview_id}", response_model=FeedbackResp)
async def get_feedback(
    interview_id: str,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> FeedbackResp:
    try:
        result = await orchestrator.get_feedback(interview_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Interview session not found.") from exc
    except NotReadyError as exc:
        raise HTTPException(status_code=404, detail="Feedback not yet available for this interview.") from exc
    except StoreError as exc:
        logger.error(f"Failed to fetch feedback: {exc}")
        raise HTTPException(status_code=500, detail="Failed to fetch feedback") from exc
    return FeedbackResp(feedback=result.feedback, interviewId=result.interview_id)


async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": "Malformed request body."})


def create_app(
    orchestrator: InterviewOrchestrator | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        orchestrator: Pre-built orchestrator (built from settings on startup if None).
        settings: Settings used when building the orchestrator.

    Returns:
        The FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if orchestrator is not None:
            app.state.orchestrator = orchestrator
            yield
            return

        cfg = settings or get_settings()
        store = SqlSessionStore.from_url(cfg.database_url)
        await store.create_schema()
        llm_client = build_completion_client(cfg.completion_config())
        app.state.orchestrator = InterviewOrchestrator(
            llm_client=llm_client,
            store=store,
            summary_target=cfg.summary_target_tokens,
            question_max_tokens=cfg.llm_max_tokens,
            feedback_max_tokens=cfg.feedback_max_tokens,
        )
        logger.info("Interview service ready")
        try:
            yield
        finally:
            await llm_client.close()
            await store.close()

    app = FastAPI(title="AI Interviewer API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _bad_request)

    @app.get("/")
    async def root() -> str:
        return "AI Interviewer backend is running!"

    app.include_router(router)
    if orchestrator is not None:
        app.state.orchestrator = orchestrator
    return app
