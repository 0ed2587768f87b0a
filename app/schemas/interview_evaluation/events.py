"""
Description:
Event payloads exchanged by the interview evaluation job: the request that
starts a job and the failure signal consumed by the failure handler.

Dependencies:
- pydantic: For data validation and settings management.
- uuid: For event identifiers.
"""
import uuid
from typing import Optional

from pydantic import BaseModel, Field

from app.constants.evaluation_settings import EVALUATION_REQUESTED_EVENT


class EvaluationRequestedData(BaseModel):
    interviewId: str
    userId: str
    interviewMode: Optional[str] = None


class EvaluationRequestedEvent(BaseModel):
    """Emitted when an interview transcript is ready to be scored."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Event id, doubles as the job id")
    name: str = Field(default=EVALUATION_REQUESTED_EVENT)
    data: EvaluationRequestedData


class JobFailedEvent(BaseModel):
    """Emitted once a job has exhausted its retries."""
    function_id: str
    event: EvaluationRequestedEvent
    error_message: Optional[str] = None
