"""
Completion Service

Submits evaluation prompts to the OpenAI Responses API in background mode and
polls the returned handle until the structured evaluation is ready. The
background mode keeps the request short: the submit call returns a response id
immediately and the poller fetches the finished response afterwards.

The reply is trusted only after validation. The first parseable JSON object in
the output messages is taken, its skill count is checked against the prompt's
expected count, and the whole object is validated with the mode's pydantic
model before anything is returned.

Dependencies:
- openai: For the Responses API client and its error types
- pydantic: For validating the structured evaluation
- loguru: For logging operations
- asyncio: For the fixed polling interval
"""

import asyncio
import json
from typing import Any, Awaitable, Callable, Dict, Optional, Type

from loguru import logger
from openai import APIError, APIStatusError, AsyncOpenAI
from pydantic import ValidationError

from app.constants.evaluation_settings import EVALUATION_MODEL, MAX_POLL_ATTEMPTS, POLL_INTERVAL_SECONDS
from app.errors.evaluation_errors import (
    CompletionRefusalError,
    CompletionServiceError,
    CompletionTimeoutError,
    EvaluationShapeError,
)
from app.schemas.interview_evaluation import (
    Evaluation,
    InterviewMode,
    JobSpecificEvaluation,
    PromptBundle,
    QuickQuestionEvaluation,
)

PENDING_STATUSES = frozenset({"queued", "in_progress"})
FAILED_STATUSES = frozenset({"failed", "cancelled", "incomplete"})
EXTRACTION_FAILED_MESSAGE = "Failed to extract structured data from OpenAI response"

EVALUATION_MODELS: Dict[InterviewMode, Type[Evaluation]] = {
    InterviewMode.FULL: Evaluation,
    InterviewMode.QUICK_QUESTION: QuickQuestionEvaluation,
    InterviewMode.JOB_SPECIFIC: JobSpecificEvaluation,
}


def _get(item: Any, key: str, default: Any = None) -> Any:
    """Read a field from an SDK object or a plain dict."""
    if isinstance(item, dict):
        return item.get(key, default)
    return getattr(item, key, default)


def _describe_error(response: Any) -> str:
    error = _get(response, "error")
    if error is not None:
        message = _get(error, "message")
        code = _get(error, "code")
        if message and code:
            return f"{code}: {message}"
        if message:
            return str(message)
    details = _get(response, "incomplete_details")
    if details is not None:
        reason = _get(details, "reason")
        if reason:
            return f"incomplete: {reason}"
    return "no error details"


def extract_structured_output(response: Any) -> Dict[str, Any]:
    """
    Pull the evaluation JSON out of a finished response.

    Output messages are scanned in order and the first `output_text` content
    item that parses as a JSON object wins. Only when nothing parses is a
    refusal reported.

    Raises:
        CompletionRefusalError: If no JSON was found and the model refused.
        CompletionServiceError: If no JSON was found and there was no refusal.
    """
    refusal: Optional[str] = None
    for output_item in _get(response, "output") or []:
        for content_item in _get(output_item, "content") or []:
            content_type = _get(content_item, "type")
            if content_type == "output_text":
                text = _get(content_item, "text")
                if not text:
                    continue
                try:
                    parsed = json.loads(text)
                except json.JSONDecodeError:
                    # Try next content item
                    continue
                if isinstance(parsed, dict):
                    return parsed
            elif content_type == "refusal" and refusal is None:
                refusal = _get(content_item, "refusal")

    if refusal:
        raise CompletionRefusalError(refusal)
    raise CompletionServiceError(EXTRACTION_FAILED_MESSAGE)


def validate_evaluation(payload: Dict[str, Any], expected_skill_count: int, mode: InterviewMode) -> Dict[str, Any]:
    """
    Check the skill count and the mode's evaluation shape.

    Returns:
        Dict[str, Any]: The validated evaluation as plain JSON data.

    Raises:
        EvaluationShapeError: If the payload does not match the expected shape.
    """
    skills = payload.get("skills")
    skill_count = len(skills) if isinstance(skills, list) else 0
    if skill_count != expected_skill_count:
        raise EvaluationShapeError(f"Expected {expected_skill_count} skill evaluations, got {skill_count}")

    model = EVALUATION_MODELS[mode]
    try:
        evaluation = model.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        detail = first.get("msg", str(e))
        raise EvaluationShapeError(
            f"Evaluation did not match the expected format: {location}: {detail}" if location
            else f"Evaluation did not match the expected format: {detail}"
        ) from e
    return evaluation.model_dump()


class CompletionService:
    """
    Service for requesting and collecting structured evaluations.

    Neither call retries: a failure propagates to the job runner, which owns
    the retry policy.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = EVALUATION_MODEL,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        max_attempts: int = MAX_POLL_ATTEMPTS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize the completion service.

        Args:
            client: The AsyncOpenAI client (or a test double with the same surface).
            model: Model name sent with every request.
            poll_interval: Seconds to wait before each status check.
            max_attempts: Status checks allowed before giving up.
            sleep: Awaitable used between checks.
        """
        self.client = client
        self.model = model
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self._sleep = sleep

    async def request_completion(self, bundle: PromptBundle) -> str:
        """
        Submit the prompt in background mode.

        Returns:
            str: The response id used to poll for the result.

        Raises:
            CompletionServiceError: On an error reply or a reply without an id.
        """
        try:
            response = await self.client.responses.create(
                model=self.model,
                input=[
                    {
                        "role": "user",
                        "content": [{"type": "input_text", "text": bundle.prompt}],
                    }
                ],
                text={
                    "format": {
                        "type": "json_schema",
                        "name": bundle.schemaName,
                        "schema": bundle.schema_definition,
                        "strict": True,
                    }
                },
                background=True,
            )
        except APIStatusError as e:
            logger.error(f"Completion request rejected with status {e.status_code}: {e.message}")
            raise CompletionServiceError(f"OpenAI API error: {e.message}", status_code=e.status_code) from e
        except APIError as e:
            logger.error(f"Completion request failed: {e.message}")
            raise CompletionServiceError(f"OpenAI API error: {e.message}") from e

        response_id = _get(response, "id")
        if not response_id:
            raise CompletionServiceError("Failed to get response ID from OpenAI")

        logger.info(f"Completion requested: {response_id} (schema {bundle.schemaName})")
        return response_id

    async def poll_for_completion(
        self,
        response_id: str,
        expected_skill_count: int,
        mode: InterviewMode,
    ) -> Dict[str, Any]:
        """
        Wait for the response to finish and return the validated evaluation.

        Raises:
            CompletionTimeoutError: If the response is still pending after max_attempts checks.
            CompletionServiceError: If the response failed, was cancelled or is incomplete.
            CompletionRefusalError: If the model refused to evaluate.
            EvaluationShapeError: If the evaluation has the wrong shape.
        """
        for attempt in range(1, self.max_attempts + 1):
            await self._sleep(self.poll_interval)

            try:
                response = await self.client.responses.retrieve(response_id)
            except APIStatusError as e:
                logger.error(f"Status check for {response_id} rejected with status {e.status_code}: {e.message}")
                raise CompletionServiceError(
                    f"Failed to check OpenAI response status: {e.message}", status_code=e.status_code
                ) from e
            except APIError as e:
                raise CompletionServiceError(f"Failed to check OpenAI response status: {e.message}") from e

            status = _get(response, "status")
            logger.debug(f"Completion {response_id} status check {attempt}/{self.max_attempts}: {status}")

            if status in PENDING_STATUSES:
                continue
            if status in FAILED_STATUSES:
                raise CompletionServiceError(f"OpenAI processing {status}: {_describe_error(response)}")
            if status != "completed":
                raise CompletionServiceError(f"Unexpected OpenAI response status: {status}")

            payload = extract_structured_output(response)
            evaluation = validate_evaluation(payload, expected_skill_count, mode)
            logger.info(f"Completion {response_id} finished after {attempt} status checks")
            return evaluation

        logger.warning(f"Completion {response_id} still pending after {self.max_attempts} status checks")
        raise CompletionTimeoutError(self.max_attempts)
