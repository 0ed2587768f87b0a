from .interview_record import (
    InterviewMode,
    EvaluationStatus,
    TranscriptMessage,
    PracticedQuestion,
    QuestionSource,
    JobContext,
    GeneratedQuestion,
    InterviewSnapshot,
)
from .evaluation_result import (
    SkillEvaluation,
    Evaluation,
    QuickQuestionEvaluation,
    JobSpecificEvaluation,
    EvaluationStatusResponse,
    EvaluationRequestAccepted,
)
from .events import EvaluationRequestedData, EvaluationRequestedEvent, JobFailedEvent
from .prompt_bundle import PromptBundle

__all__ = [
    "InterviewMode",
    "EvaluationStatus",
    "TranscriptMessage",
    "PracticedQuestion",
    "QuestionSource",
    "JobContext",
    "GeneratedQuestion",
    "InterviewSnapshot",
    "SkillEvaluation",
    "Evaluation",
    "QuickQuestionEvaluation",
    "JobSpecificEvaluation",
    "EvaluationStatusResponse",
    "EvaluationRequestAccepted",
    "EvaluationRequestedData",
    "EvaluationRequestedEvent",
    "JobFailedEvent",
    "PromptBundle",
]
