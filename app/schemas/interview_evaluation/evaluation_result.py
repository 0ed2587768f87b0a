"""
Description:
This module defines the structured evaluation returned by the completion
service and the validation applied to it before it may be persisted.

Dependencies:
- pydantic: For data validation and settings management.
- typing: For type annotations.
- app.constants.evaluation_schemas: For score and verdict vocabularies.
"""
from typing import ClassVar, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from app.constants.evaluation_schemas import SKILL_SCORES, HIRE_VERDICTS, QUALITY_VERDICTS


class SkillEvaluation(BaseModel):
    skillName: str
    score: float = Field(..., description="Score from 1 to 4 in half points")
    explanation: str
    supportingQuotes: List[str] = Field(default_factory=list)

    @field_validator("score")
    @classmethod
    def score_in_scale(cls, value: float) -> float:
        if value not in SKILL_SCORES:
            raise ValueError(f"score must be one of {list(SKILL_SCORES)}, got {value}")
        return value


class Evaluation(BaseModel):
    """Evaluation of a full interview (12 skills, hire verdict)."""
    skills: List[SkillEvaluation]
    overallVerdict: str
    overallExplanation: str
    recommendedImprovements: List[str] = Field(default_factory=list)

    allowed_verdicts: ClassVar[Tuple[str, ...]] = HIRE_VERDICTS

    @model_validator(mode="after")
    def verdict_in_vocabulary(self):
        if self.overallVerdict not in self.allowed_verdicts:
            raise ValueError(
                f"overallVerdict must be one of {list(self.allowed_verdicts)}, got '{self.overallVerdict}'"
            )
        return self


class QuickQuestionEvaluation(Evaluation):
    """Evaluation of one practiced question (4 category skills, quality verdict)."""
    allowed_verdicts: ClassVar[Tuple[str, ...]] = QUALITY_VERDICTS


class JobSpecificEvaluation(Evaluation):
    """Evaluation of a job-specific interview (6 skills, hire verdict, company fit)."""
    companyFitAssessment: str


class EvaluationStatusResponse(BaseModel):
    """What the UI polls until the evaluation reaches a terminal state."""
    interviewId: str
    evaluationStatus: Optional[str] = None
    evaluation: Optional[dict] = None
    evaluationError: Optional[str] = None
    evaluatedAt: Optional[str] = None


class EvaluationRequestAccepted(BaseModel):
    interviewId: str
    evaluationStatus: str
    eventId: str
