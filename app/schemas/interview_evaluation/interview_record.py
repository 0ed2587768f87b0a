"""
Interview Record Schemas

This module defines the typed view of a mock interview record as the
evaluation job sees it: the transcript, the interview mode and the
mode-dependent context (a practiced question, or a job context with its
generated questions).

The snapshot produced by the transcript loader is checkpointed between job
steps, so every model here round-trips through plain JSON.

Dependencies:
- pydantic: For data validation and serialization
- typing: For type hints
- enum: For mode and status enumerations
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class InterviewMode(str, Enum):
    """Which rubric, schema and verdict vocabulary apply to an interview."""
    FULL = "full"
    QUICK_QUESTION = "quick_question"
    JOB_SPECIFIC = "job_specific"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "InterviewMode":
        """Interviews created before modes existed have no mode; they are full interviews."""
        if value is None:
            return cls.FULL
        try:
            return cls(value)
        except ValueError:
            return cls.FULL


class EvaluationStatus(str, Enum):
    """Status of an interview's AI evaluation."""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


# Live-transcript providers label speakers differently
_SENDER_ALIASES = {
    "user": "candidate",
    "agent": "interviewer",
    "ai": "interviewer",
}


class TranscriptMessage(BaseModel):
    """One exchange line of the interview transcript."""
    sender: Literal["interviewer", "candidate"] = Field(..., description="Who spoke")
    message: str = Field(..., description="What was said")

    @field_validator("sender", mode="before")
    @classmethod
    def normalize_sender(cls, value):
        if isinstance(value, str):
            lowered = value.strip().lower()
            return _SENDER_ALIASES.get(lowered, lowered)
        return value


class QuestionSource(BaseModel):
    """Where an ad-hoc practice question came from."""
    type: str
    companyName: Optional[str] = None
    jobTitle: Optional[str] = None


class PracticedQuestion(BaseModel):
    """The single question answered in a quick-question session."""
    question: str
    category: str
    source: Optional[QuestionSource] = None


class JobContext(BaseModel):
    """The company and role a job-specific interview was generated for."""
    companyName: str
    jobTitle: str
    descriptionSnippet: Optional[str] = None


class GeneratedQuestion(BaseModel):
    """A question generated for a job-specific interview."""
    question: str
    category: str


class InterviewSnapshot(BaseModel):
    """Everything the evaluation job needs from an interview record."""
    interviewId: str
    userId: str
    mode: InterviewMode = InterviewMode.FULL
    transcript: List[TranscriptMessage] = Field(default_factory=list)
    question: Optional[PracticedQuestion] = Field(default=None, description="Quick-question context")
    questionFromBank: bool = Field(default=False, description="Whether the question came from the question bank")
    jobContext: Optional[JobContext] = Field(default=None, description="Job-specific context")
    generatedQuestions: Optional[List[GeneratedQuestion]] = Field(default=None, description="Job-specific questions")
