"""
Interview Evaluation Job

The background workflow that scores a finished mock interview. One job handles
one "evaluation requested" event and runs five checkpointed steps in order:

    fetch-interview-data -> build-prompt -> create-completion
        -> poll-for-completion -> save-evaluation

The job is attempted at most JOB_RETRIES + 1 times. A retry re-enters the job
from the top, and the step runner replays every step that already completed,
so a completion request is submitted once per job no matter how often the job
is retried. Precondition and shape errors are not retried. When the last
attempt fails the job emits a JobFailedEvent to the failure handler, so an
interview never stays pending after its job ends.

Dependencies:
- sqlalchemy: For the session factory
- openai: For the completion client type
- loguru: For logging operations
"""

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from loguru import logger
from openai import AsyncOpenAI
from sqlalchemy.orm import Session

from app.constants.evaluation_settings import EVALUATION_FUNCTION_ID, JOB_RETRIES, UNKNOWN_FAILURE_MESSAGE
from app.errors.evaluation_errors import EvaluationError, NonRetriableEvaluationError
from app.schemas.interview_evaluation import (
    EvaluationRequestedEvent,
    InterviewSnapshot,
    JobFailedEvent,
    PromptBundle,
)
from app.services.interview_evaluation.completion_service import CompletionService
from app.services.interview_evaluation.failure_handler import EvaluationFailureHandler
from app.services.interview_evaluation.interview_repository import load_interview_snapshot, persist_evaluation
from app.services.interview_evaluation.prompt_builder import build_evaluation_prompt
from app.services.interview_evaluation.step_runner import StepRunner

FETCH_INTERVIEW_STEP = "fetch-interview-data"
BUILD_PROMPT_STEP = "build-prompt"
CREATE_COMPLETION_STEP = "create-completion"
POLL_COMPLETION_STEP = "poll-for-completion"
SAVE_EVALUATION_STEP = "save-evaluation"


@dataclass
class JobResult:
    """Outcome of one evaluation job."""
    success: bool
    interviewId: str
    skillsEvaluated: Optional[int] = None
    verdict: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _failure_message(error: BaseException) -> str:
    if isinstance(error, EvaluationError):
        return error.message or UNKNOWN_FAILURE_MESSAGE
    return str(error) or UNKNOWN_FAILURE_MESSAGE


class EvaluationJob:
    """
    Runs the evaluation workflow for "evaluation requested" events.

    Args:
        session_factory: Opens a database session per attempt.
        completion_service: Requests and polls completions.
        failure_handler: Receives the job-failed signal; built from the
            session factory when omitted.
        retries: Retries after the first attempt.
        clock: Source of the evaluation timestamp.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        completion_service: CompletionService,
        failure_handler: Optional[EvaluationFailureHandler] = None,
        retries: int = JOB_RETRIES,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.session_factory = session_factory
        self.completion_service = completion_service
        self.failure_handler = failure_handler or EvaluationFailureHandler(session_factory)
        self.retries = retries
        self.clock = clock

    async def run(self, event: EvaluationRequestedEvent) -> JobResult:
        """
        Run the job to completion or to a recorded failure.

        Returns:
            JobResult: success with skill count and verdict, or failure with
            the message written onto the interview.
        """
        data = event.data
        max_attempts = self.retries + 1
        last_error: Optional[BaseException] = None

        for attempt in range(1, max_attempts + 1):
            logger.info(f"Evaluating interview {data.interviewId} (job {event.id}, attempt {attempt}/{max_attempts})")
            try:
                return await self._attempt(event)
            except NonRetriableEvaluationError as e:
                logger.warning(f"Job {event.id} failed without retry: {e.message}")
                last_error = e
                break
            except Exception as e:
                logger.warning(f"Job {event.id} attempt {attempt} failed: {e}")
                last_error = e

        message = _failure_message(last_error) if last_error is not None else UNKNOWN_FAILURE_MESSAGE
        self.failure_handler.handle(
            JobFailedEvent(function_id=EVALUATION_FUNCTION_ID, event=event, error_message=message)
        )
        return JobResult(success=False, interviewId=data.interviewId, error=message)

    async def _attempt(self, event: EvaluationRequestedEvent) -> JobResult:
        data = event.data
        session = self.session_factory()
        try:
            steps = StepRunner(session, event.id)

            async def fetch_interview() -> Dict[str, Any]:
                snapshot = load_interview_snapshot(session, data.interviewId, data.userId)
                return snapshot.model_dump(mode="json")

            snapshot = InterviewSnapshot.model_validate(await steps.run(FETCH_INTERVIEW_STEP, fetch_interview))

            async def build_prompt() -> Dict[str, Any]:
                return build_evaluation_prompt(snapshot).model_dump(by_alias=True)

            bundle = PromptBundle.model_validate(await steps.run(BUILD_PROMPT_STEP, build_prompt))

            async def create_completion() -> str:
                return await self.completion_service.request_completion(bundle)

            response_id = await steps.run(CREATE_COMPLETION_STEP, create_completion)

            async def poll_for_completion() -> Dict[str, Any]:
                evaluation = await self.completion_service.poll_for_completion(
                    response_id, bundle.expectedSkillCount, snapshot.mode
                )
                return {"evaluation": evaluation, "evaluatedAt": self.clock().isoformat()}

            polled = await steps.run(POLL_COMPLETION_STEP, poll_for_completion)
            evaluation = polled["evaluation"]

            async def save_evaluation() -> Dict[str, Any]:
                rows = persist_evaluation(
                    session, snapshot, evaluation, polled["evaluatedAt"], self.completion_service.model
                )
                return {"rowsAffected": rows}

            await steps.run(SAVE_EVALUATION_STEP, save_evaluation)
        finally:
            session.close()

        logger.info(f"Interview {data.interviewId} evaluated: {evaluation['overallVerdict']}")
        return JobResult(
            success=True,
            interviewId=data.interviewId,
            skillsEvaluated=len(evaluation["skills"]),
            verdict=evaluation["overallVerdict"],
        )


async def run_evaluation_job(
    event: EvaluationRequestedEvent,
    session_factory: Callable[[], Session],
    client: AsyncOpenAI,
) -> JobResult:
    """Entry point scheduled by the trigger route as a background task."""
    job = EvaluationJob(session_factory, CompletionService(client))
    result = await job.run(event)
    logger.info(f"Evaluation job {event.id} finished: {result.to_dict()}")
    return result
