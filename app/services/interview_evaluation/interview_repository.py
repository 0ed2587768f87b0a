"""
Interview Repository

Database access for the interview evaluation job: loading the interview a job
evaluates and writing the job's outcome back onto it. Every query is scoped by
both the interview id and the owning user id, so a job can never read or write
another user's interview.

Dependencies:
- sqlalchemy: For ORM queries and bulk updates
- pydantic: For validating stored transcript messages
- loguru: For logging operations
- app.models.interview_models: For the mock interview table
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from loguru import logger
from pydantic import ValidationError
from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload

from app.errors.evaluation_errors import EvaluationPreconditionError
from app.models.interview_models import MockInterview
from app.schemas.interview_evaluation import (
    EvaluationStatus,
    GeneratedQuestion,
    InterviewMode,
    InterviewSnapshot,
    JobContext,
    PracticedQuestion,
    TranscriptMessage,
)

INTERVIEW_NOT_FOUND_MESSAGE = "Interview not found"
NO_TRANSCRIPT_MESSAGE = "No transcript available for evaluation"
MALFORMED_TRANSCRIPT_MESSAGE = "Transcript message {index} has an unrecognized sender or no text"


def _as_uuid(interview_id: Union[str, uuid.UUID]) -> Optional[uuid.UUID]:
    if isinstance(interview_id, uuid.UUID):
        return interview_id
    try:
        return uuid.UUID(str(interview_id))
    except ValueError:
        return None


def get_interview_for_user(session: Session, interview_id: Union[str, uuid.UUID], user_id: str) -> Optional[MockInterview]:
    """Fetch an interview owned by user_id, with its bank question, or None."""
    record_id = _as_uuid(interview_id)
    if record_id is None:
        return None
    statement = (
        select(MockInterview)
        .options(joinedload(MockInterview.question))
        .where(MockInterview.id == record_id, MockInterview.user_id == user_id)
    )
    return session.execute(statement).scalar_one_or_none()


def _parse_transcript(entries: List[Any]) -> List[TranscriptMessage]:
    messages = []
    for index, entry in enumerate(entries, start=1):
        try:
            messages.append(TranscriptMessage.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Rejected transcript message {index}: {e.errors()}")
            raise EvaluationPreconditionError(MALFORMED_TRANSCRIPT_MESSAGE.format(index=index)) from e
    return messages


def _practiced_question(interview: MockInterview) -> Optional[PracticedQuestion]:
    # Bank question wins over an ad-hoc one
    if interview.question is not None:
        return PracticedQuestion(question=interview.question.question, category=interview.question.category)
    if interview.adhoc_question:
        return PracticedQuestion.model_validate(interview.adhoc_question)
    return None


def load_interview_snapshot(session: Session, interview_id: str, user_id: str) -> InterviewSnapshot:
    """
    Load the interview the job evaluates.

    Args:
        session (Session): Database session.
        interview_id (str): Interview id from the triggering event.
        user_id (str): Owning user id from the triggering event.

    Returns:
        InterviewSnapshot: JSON-serializable view of the interview.

    Raises:
        EvaluationPreconditionError: If the interview does not exist for this
            user, has no transcript, or has a transcript message that is not
            a recognized interviewer or candidate line.
    """
    interview = get_interview_for_user(session, interview_id, user_id)
    if interview is None:
        raise EvaluationPreconditionError(INTERVIEW_NOT_FOUND_MESSAGE)
    if not interview.transcript:
        raise EvaluationPreconditionError(NO_TRANSCRIPT_MESSAGE)

    mode = InterviewMode.from_value(interview.interview_mode)
    snapshot = InterviewSnapshot(
        interviewId=str(interview.id),
        userId=interview.user_id,
        mode=mode,
        transcript=_parse_transcript(interview.transcript),
    )

    if mode == InterviewMode.QUICK_QUESTION:
        snapshot.question = _practiced_question(interview)
        snapshot.questionFromBank = interview.question is not None
    elif mode == InterviewMode.JOB_SPECIFIC:
        if interview.job_context:
            snapshot.jobContext = JobContext.model_validate(interview.job_context)
        if interview.generated_questions:
            snapshot.generatedQuestions = [
                GeneratedQuestion.model_validate(item) for item in interview.generated_questions
            ]

    logger.debug(f"Loaded interview {snapshot.interviewId} ({mode.value}, {len(snapshot.transcript)} messages)")
    return snapshot


def build_stored_evaluation(
    snapshot: InterviewSnapshot,
    evaluation: Dict[str, Any],
    evaluated_at: str,
    model_version: str,
) -> Dict[str, Any]:
    """Merge a validated evaluation with the interview context stored alongside it."""
    stored: Dict[str, Any] = {
        **evaluation,
        "interviewMode": snapshot.mode.value,
        "evaluatedAt": evaluated_at,
        "modelVersion": model_version,
    }
    if snapshot.mode == InterviewMode.QUICK_QUESTION and snapshot.question is not None:
        stored["questionPracticed"] = snapshot.question.model_dump(exclude_none=True)
    elif snapshot.mode == InterviewMode.JOB_SPECIFIC:
        if snapshot.jobContext is not None:
            stored["jobContext"] = snapshot.jobContext.model_dump(exclude_none=True)
        if snapshot.generatedQuestions is not None:
            stored["questionsAsked"] = [item.model_dump() for item in snapshot.generatedQuestions]
    return stored


def persist_evaluation(
    session: Session,
    snapshot: InterviewSnapshot,
    evaluation: Dict[str, Any],
    evaluated_at: str,
    model_version: str,
) -> int:
    """
    Store a completed evaluation on the interview.

    The write is an unconditional overwrite scoped to (id, user_id); given
    the same inputs it produces the same row, so re-running it is harmless.

    Returns:
        int: Rows affected (0 when the interview is not owned by the user).
    """
    stored = build_stored_evaluation(snapshot, evaluation, evaluated_at, model_version)
    statement = (
        update(MockInterview)
        .where(MockInterview.id == _as_uuid(snapshot.interviewId), MockInterview.user_id == snapshot.userId)
        .values(
            evaluation=stored,
            evaluation_created_at=datetime.fromisoformat(evaluated_at),
            evaluation_status=EvaluationStatus.COMPLETED.value,
            evaluation_error=None,
        )
    )
    try:
        result = session.execute(statement)
        session.commit()
    except Exception:
        session.rollback()
        raise

    if result.rowcount == 0:
        logger.warning(f"Evaluation for interview {snapshot.interviewId} matched no row owned by {snapshot.userId}")
    else:
        logger.info(f"Saved evaluation for interview {snapshot.interviewId}: {evaluation.get('overallVerdict')}")
    return result.rowcount


def mark_evaluation_pending(session: Session, interview: MockInterview) -> None:
    """Flag an interview as being evaluated and clear any previous error."""
    interview.evaluation_status = EvaluationStatus.PENDING.value
    interview.evaluation_error = None
    try:
        session.commit()
    except Exception:
        session.rollback()
        raise


def mark_evaluation_failed(session: Session, interview_id: str, user_id: str, error_message: str) -> int:
    """
    Record a failed evaluation, only while the interview is still pending.

    Returns:
        int: Rows affected (0 when the interview was not pending or not owned).
    """
    record_id = _as_uuid(interview_id)
    if record_id is None:
        return 0
    statement = (
        update(MockInterview)
        .where(
            MockInterview.id == record_id,
            MockInterview.user_id == user_id,
            MockInterview.evaluation_status == EvaluationStatus.PENDING.value,
        )
        .values(
            evaluation_status=EvaluationStatus.FAILED.value,
            evaluation_error=error_message,
        )
    )
    try:
        result = session.execute(statement)
        session.commit()
    except Exception:
        session.rollback()
        raise
    return result.rowcount
