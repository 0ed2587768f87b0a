"""
Evaluation Failure Handler

Consumes the job-failed signal of the evaluation job and marks the interview
as failed so the UI stops waiting on it. The handler is the last resort: it is
not retried and it never raises, a database error is only logged.

Dependencies:
- sqlalchemy: For the session factory type
- loguru: For logging operations
"""

from typing import Callable

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.constants.evaluation_settings import EVALUATION_FUNCTION_ID, UNKNOWN_FAILURE_MESSAGE
from app.schemas.interview_evaluation import JobFailedEvent
from app.services.interview_evaluation.interview_repository import mark_evaluation_failed


class EvaluationFailureHandler:
    """Writes the failure status and message for failed evaluation jobs."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def handle(self, failure: JobFailedEvent) -> bool:
        """
        Mark the failed job's interview as failed.

        Returns:
            bool: True if a row was updated. A repeated signal, or one for an
            interview that is no longer pending, updates nothing.
        """
        if failure.function_id != EVALUATION_FUNCTION_ID:
            logger.debug(f"Ignoring failure signal for function {failure.function_id}")
            return False

        data = failure.event.data
        message = failure.error_message or UNKNOWN_FAILURE_MESSAGE
        logger.error(f"Evaluation failed for interview {data.interviewId}: {message}")

        session = self.session_factory()
        try:
            updated = mark_evaluation_failed(session, data.interviewId, data.userId, message)
        except SQLAlchemyError as e:
            logger.error(f"Failed to record evaluation failure for interview {data.interviewId}: {e}")
            return False
        finally:
            session.close()

        if not updated:
            logger.info(f"Interview {data.interviewId} was not pending; failure status left unchanged")
        return bool(updated)
