"""Mock Interview Evaluation Routes Module

This module defines FastAPI routes for requesting the AI evaluation of a
finished mock interview and for polling its status. Requesting an evaluation
marks the interview pending, emits the "evaluation requested" event and runs
the evaluation job as a background task; the UI then polls the status route
until the interview reaches completed or failed.

Dependencies:
- fastapi: For API routing, background tasks and dependency injection.
- sqlalchemy: For the request-scoped database session.
- loguru: For logging operations.
- app.core.route_limiters: For rate limiting middleware.
- app.services.auth.firebase_auth: For the authenticated user's uid.
- app.services.interview_evaluation: For the evaluation job.
- app.errors.exceptions: For custom exception handling.
"""
from fastapi import APIRouter, BackgroundTasks, Depends, Request
from loguru import logger
from openai import AsyncOpenAI
from sqlalchemy.orm import Session, sessionmaker
from starlette.status import HTTP_202_ACCEPTED

from app.core.ai_client_manager import get_evaluation_client
from app.core.route_limiters import limiter
from app.database import get_db_session, get_session_factory
from app.errors.exceptions import EvaluationAlreadyPending, InterviewNotFound, TranscriptUnavailable
from app.schemas.interview_evaluation import (
    EvaluationRequestAccepted,
    EvaluationRequestedData,
    EvaluationRequestedEvent,
    EvaluationStatus,
    EvaluationStatusResponse,
)
from app.services.auth.firebase_auth import get_current_user_uid
from app.services.interview_evaluation.evaluation_job import run_evaluation_job
from app.services.interview_evaluation.interview_repository import get_interview_for_user, mark_evaluation_pending

router = APIRouter(
    prefix="/api/mock-interviews",
    tags=["mock-interview-evaluation"],
    responses={404: {"description": "Not found"}}
)


@router.post("/{interview_id}/evaluate", status_code=HTTP_202_ACCEPTED, response_model=EvaluationRequestAccepted)
@limiter.limit("5/minute")  # Custom limit for this endpoint
async def request_evaluation_route(
    request: Request,
    interview_id: str,
    background_tasks: BackgroundTasks,
    uid: str = Depends(get_current_user_uid),
    session: Session = Depends(get_db_session),
    session_factory: sessionmaker = Depends(get_session_factory),
    client: AsyncOpenAI = Depends(get_evaluation_client),
):
    """Request the AI evaluation of a mock interview.

    Args:
        request (Request): FastAPI request object for rate limiting
        interview_id (str): Id of the interview to evaluate
        background_tasks (BackgroundTasks): Runs the evaluation job after the response
        uid (str): Authenticated user's uid
        session (Session): Database session dependency
        session_factory (sessionmaker): Session factory for the background job
        client (AsyncOpenAI): Completion client for the background job

    Returns:
        EvaluationRequestAccepted: Interview id, pending status and the event id

    Raises:
        InterviewNotFound: If the interview does not exist for this user
        TranscriptUnavailable: If the interview has no transcript yet
        EvaluationAlreadyPending: If an evaluation is already running

    Rate Limit:
        5 requests per minute per client
    """
    interview = get_interview_for_user(session, interview_id, uid)
    if interview is None:
        raise InterviewNotFound(interview_id)
    if not interview.transcript:
        raise TranscriptUnavailable()
    if interview.evaluation_status == EvaluationStatus.PENDING.value:
        raise EvaluationAlreadyPending(interview_id)

    mark_evaluation_pending(session, interview)

    event = EvaluationRequestedEvent(
        data=EvaluationRequestedData(
            interviewId=str(interview.id),
            userId=uid,
            interviewMode=interview.interview_mode or "full",
        )
    )
    logger.info(f"Emitted {event.name} ({event.id}) for interview {event.data.interviewId}")
    background_tasks.add_task(run_evaluation_job, event, session_factory, client)

    return EvaluationRequestAccepted(
        interviewId=event.data.interviewId,
        evaluationStatus=EvaluationStatus.PENDING.value,
        eventId=event.id,
    )


@router.get("/{interview_id}/evaluation", response_model=EvaluationStatusResponse)
@limiter.limit("30/minute")  # Polled by the UI while pending
async def get_evaluation_route(
    request: Request,
    interview_id: str,
    uid: str = Depends(get_current_user_uid),
    session: Session = Depends(get_db_session),
):
    """Return the evaluation status of a mock interview, and the evaluation once completed.

    Raises:
        InterviewNotFound: If the interview does not exist for this user
    """
    interview = get_interview_for_user(session, interview_id, uid)
    if interview is None:
        raise InterviewNotFound(interview_id)

    return EvaluationStatusResponse(
        interviewId=str(interview.id),
        evaluationStatus=interview.evaluation_status,
        evaluation=interview.evaluation,
        evaluationError=interview.evaluation_error,
        evaluatedAt=interview.evaluation_created_at.isoformat() if interview.evaluation_created_at else None,
    )
