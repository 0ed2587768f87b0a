"""
Description:
Structured-output JSON schemas for interview evaluations.

Each interview mode asks the completion service for a strict JSON object
whose skills array has exactly the mode's skill count. The verdict
vocabularies and improvement bounds per mode are defined here as well so
that schema, prompt and result validation agree.

Dependencies:
- copy: For handing out independent schema copies.
- typing: For type annotations.
"""
import copy
from typing import Any, Dict, Optional, Tuple

SKILL_SCORES: Tuple[float, ...] = (1, 1.5, 2, 2.5, 3, 3.5, 4)

HIRE_VERDICTS: Tuple[str, ...] = ("Strong No Hire", "No Hire", "Hire", "Strong Hire")
QUALITY_VERDICTS: Tuple[str, ...] = ("Strong", "Good", "Needs Work", "Weak")

FULL_SKILL_COUNT = 12
JOB_SPECIFIC_SKILL_COUNT = 6

FULL_SCHEMA_NAME = "interview_evaluation"
QUICK_QUESTION_SCHEMA_NAME = "quick_question_evaluation"
JOB_SPECIFIC_SCHEMA_NAME = "job_specific_evaluation"

# (min, max) recommended improvements per mode
IMPROVEMENT_BOUNDS: Dict[str, Tuple[int, int]] = {
    "full": (3, 7),
    "quick_question": (2, 4),
    "job_specific": (2, 5),
}

_SKILL_ITEM_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "skillName": {"type": "string"},
        "score": {
            "type": "number",
            "enum": list(SKILL_SCORES),
        },
        "explanation": {"type": "string"},
        "supportingQuotes": {
            "type": "array",
            "items": {"type": "string"},
        },
    },
    "required": ["skillName", "score", "explanation", "supportingQuotes"],
}


def build_evaluation_schema(
    skill_count: int,
    verdicts: Tuple[str, ...],
    improvement_bounds: Tuple[int, int],
    company_fit: bool = False,
) -> Dict[str, Any]:
    """
    Build a strict evaluation schema.

    Args:
        skill_count: Exact number of skill entries (used for minItems and maxItems).
        verdicts: Closed set of allowed overall verdicts.
        improvement_bounds: (min, max) number of recommended improvements.
        company_fit: Whether companyFitAssessment is part of the object.

    Returns:
        Dict[str, Any]: A fresh JSON schema dictionary.
    """
    min_improvements, max_improvements = improvement_bounds
    properties: Dict[str, Any] = {
        "skills": {
            "type": "array",
            "items": copy.deepcopy(_SKILL_ITEM_SCHEMA),
            "minItems": skill_count,
            "maxItems": skill_count,
        },
        "overallVerdict": {
            "type": "string",
            "enum": list(verdicts),
        },
        "overallExplanation": {"type": "string"},
        "recommendedImprovements": {
            "type": "array",
            "items": {"type": "string"},
            "minItems": min_improvements,
            "maxItems": max_improvements,
        },
    }
    required = ["skills", "overallVerdict", "overallExplanation", "recommendedImprovements"]
    if company_fit:
        properties["companyFitAssessment"] = {"type": "string"}
        required.append("companyFitAssessment")

    return {
        "type": "object",
        "additionalProperties": False,
        "properties": properties,
        "required": required,
    }


def verdicts_for_mode(mode: str) -> Tuple[str, ...]:
    """Quick-question practice is graded on quality; every other mode on hireability."""
    return QUALITY_VERDICTS if mode == "quick_question" else HIRE_VERDICTS


def schema_for_mode(mode: str, skill_count: Optional[int] = None) -> Dict[str, Any]:
    """Evaluation schema for an interview mode ("full", "quick_question" or "job_specific")."""
    if mode == "quick_question":
        if skill_count is None:
            raise ValueError("skill_count is required for quick_question schemas")
        return build_evaluation_schema(skill_count, verdicts_for_mode(mode), IMPROVEMENT_BOUNDS[mode])
    if mode == "job_specific":
        return build_evaluation_schema(
            JOB_SPECIFIC_SKILL_COUNT, verdicts_for_mode(mode), IMPROVEMENT_BOUNDS[mode], company_fit=True
        )
    return build_evaluation_schema(FULL_SKILL_COUNT, verdicts_for_mode(mode), IMPROVEMENT_BOUNDS["full"])
