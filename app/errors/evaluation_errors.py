"""
Interview Evaluation Error Types

This module defines the exceptions raised by the interview evaluation job.
They are plain exceptions, not HTTP errors: the job runs in the background
and its failures end up as the record's evaluation_error message, which is
why every message is written for the person reading their feedback page.

Errors deriving from NonRetriableEvaluationError fail the job immediately;
the job runner does not spend its retry on them.

Dependencies:
- typing: For type annotations.
"""
from typing import Optional


class EvaluationError(Exception):
    """Base class for every failure of the evaluation job."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NonRetriableEvaluationError(EvaluationError):
    """Failure that retrying cannot fix (bad input or bad output shape)."""


class EvaluationPreconditionError(NonRetriableEvaluationError):
    """The interview record is missing data the selected mode requires."""


class EvaluationShapeError(NonRetriableEvaluationError):
    """The completion parsed but does not match the expected evaluation shape."""


class CompletionServiceError(EvaluationError):
    """The completion service answered with an error or an unusable reply."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CompletionRefusalError(CompletionServiceError):
    """The completion service refused to produce the evaluation."""

    def __init__(self, refusal: str):
        super().__init__(f"The completion service refused to evaluate: {refusal}")
        self.refusal = refusal


class CompletionTimeoutError(CompletionServiceError):
    """Polling ran out of attempts before the completion reached a terminal state."""

    def __init__(self, attempts: int):
        super().__init__(f"Timeout waiting for completion response after {attempts} status checks")
        self.attempts = attempts
