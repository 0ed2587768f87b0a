"""
Step Runner

Durable step memoization for the evaluation job. Each step's JSON output is
stored under (job id, step name) once the step completes; running the same
step again for the same job returns the stored output instead of executing
the step. This is what lets a retried job skip work it already finished,
most importantly the completion request.

Dependencies:
- sqlalchemy: For checkpoint storage
- loguru: For logging operations
"""

from typing import Any, Awaitable, Callable, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.interview_models import EvaluationJobStep


class StepRunner:
    """Runs named steps of one job, each at most once to completion."""

    def __init__(self, session: Session, job_id: str):
        self.session = session
        self.job_id = job_id

    def _load(self, step_name: str) -> Optional[EvaluationJobStep]:
        statement = select(EvaluationJobStep).where(
            EvaluationJobStep.job_id == self.job_id,
            EvaluationJobStep.step_name == step_name,
        )
        return self.session.execute(statement).scalar_one_or_none()

    def completed(self, step_name: str) -> bool:
        return self._load(step_name) is not None

    async def run(self, step_name: str, fn: Callable[[], Awaitable[Any]]) -> Any:
        """
        Run a step, or replay its checkpoint.

        Args:
            step_name (str): Name of the step, unique within the job.
            fn: Coroutine function producing the step's JSON-serializable output.

        Returns:
            Any: The step output, fresh or replayed.
        """
        checkpoint = self._load(step_name)
        if checkpoint is not None:
            logger.debug(f"Job {self.job_id}: replaying checkpoint for step {step_name}")
            return checkpoint.output

        output = await fn()

        self.session.add(EvaluationJobStep(job_id=self.job_id, step_name=step_name, output=output))
        try:
            self.session.commit()
        except IntegrityError:
            # Another run of the same job stored this step first; its output wins
            self.session.rollback()
            logger.warning(f"Job {self.job_id}: step {step_name} was checkpointed concurrently")
            checkpoint = self._load(step_name)
            if checkpoint is not None:
                return checkpoint.output
            raise
        logger.debug(f"Job {self.job_id}: step {step_name} completed")
        return output
