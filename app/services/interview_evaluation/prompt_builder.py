"""
Evaluation Prompt Builder

Turns an interview snapshot into the prompt, the structured-output schema and
the skill count the completion must contain. Building a prompt is pure: it
reads rubric tables and renders templates, nothing else. Missing mode context
is reported as a precondition error so that no completion is ever requested
for an interview that cannot be scored.

Dependencies:
- app.core.secure_prompt_manager: For template rendering and sanitization
- app.constants.rubrics: For category rubrics, guidance and fixed skill sets
- app.constants.evaluation_schemas: For the per-mode JSON schemas
"""

from typing import List, Optional

from app.constants.evaluation_schemas import (
    FULL_SCHEMA_NAME,
    JOB_SPECIFIC_SCHEMA_NAME,
    QUICK_QUESTION_SCHEMA_NAME,
    schema_for_mode,
)
from app.constants.rubrics import (
    FULL_INTERVIEW_SKILLS,
    get_category_guidance,
    get_category_rubric,
    job_specific_skills,
    render_skills_section,
)
from app.core.secure_prompt_manager import sanitize_text, secure_prompt_manager
from app.errors.evaluation_errors import EvaluationPreconditionError
from app.schemas.interview_evaluation import (
    GeneratedQuestion,
    InterviewMode,
    InterviewSnapshot,
    PromptBundle,
    TranscriptMessage,
)

NO_TRANSCRIPT_MESSAGE = "No transcript available for evaluation"
NO_QUESTION_MESSAGE = "Question data not found for quick question interview"
NO_JOB_CONTEXT_MESSAGE = "Job context not found for job-specific interview"
NO_GENERATED_QUESTIONS_MESSAGE = "Generated questions not found for job-specific interview"
BLANK_QUESTION_MESSAGE = "Question text or category is blank for quick question interview"
BLANK_JOB_CONTEXT_MESSAGE = "Job context is missing a company name or job title"
BLANK_GENERATED_QUESTION_MESSAGE = "Generated question text or category is blank for job-specific interview"


def format_transcript(transcript: List[TranscriptMessage]) -> str:
    """Render transcript messages as `[SENDER]: message` blocks separated by blank lines."""
    return "\n\n".join(f"[{entry.sender.upper()}]: {entry.message}" for entry in transcript)


def _clean(text: Optional[str], blank_message: str) -> str:
    try:
        return sanitize_text(text, max_length=2000, escape_html=False)
    except ValueError as e:
        raise EvaluationPreconditionError(blank_message) from e


def _build_full(transcript: str) -> PromptBundle:
    prompt = secure_prompt_manager.render(
        "full_interview_evaluation",
        skill_count=len(FULL_INTERVIEW_SKILLS),
        skills_section=render_skills_section(FULL_INTERVIEW_SKILLS),
        transcript=transcript,
    )
    return PromptBundle(
        prompt=prompt,
        schema=schema_for_mode(InterviewMode.FULL.value),
        schemaName=FULL_SCHEMA_NAME,
        expectedSkillCount=len(FULL_INTERVIEW_SKILLS),
    )


def _build_quick_question(snapshot: InterviewSnapshot, transcript: str) -> PromptBundle:
    if snapshot.question is None:
        raise EvaluationPreconditionError(NO_QUESTION_MESSAGE)

    category = _clean(snapshot.question.category, BLANK_QUESTION_MESSAGE)
    question = _clean(snapshot.question.question, BLANK_QUESTION_MESSAGE)
    skills = get_category_rubric(category).skills
    prompt = secure_prompt_manager.render(
        "quick_question_evaluation",
        category=category,
        question=question,
        category_guidance=get_category_guidance(category),
        skill_count=len(skills),
        skills_section=render_skills_section(skills),
        transcript=transcript,
    )
    return PromptBundle(
        prompt=prompt,
        schema=schema_for_mode(InterviewMode.QUICK_QUESTION.value, skill_count=len(skills)),
        schemaName=QUICK_QUESTION_SCHEMA_NAME,
        expectedSkillCount=len(skills),
    )


def _question_line(index: int, item: GeneratedQuestion) -> str:
    question = _clean(item.question, BLANK_GENERATED_QUESTION_MESSAGE)
    category = _clean(item.category, BLANK_GENERATED_QUESTION_MESSAGE)
    return f'{index}. "{question}" ({category})'


def _build_job_specific(snapshot: InterviewSnapshot, transcript: str) -> PromptBundle:
    if snapshot.jobContext is None:
        raise EvaluationPreconditionError(NO_JOB_CONTEXT_MESSAGE)
    if not snapshot.generatedQuestions:
        raise EvaluationPreconditionError(NO_GENERATED_QUESTIONS_MESSAGE)

    job_context = snapshot.jobContext
    company_name = _clean(job_context.companyName, BLANK_JOB_CONTEXT_MESSAGE)
    job_title = _clean(job_context.jobTitle, BLANK_JOB_CONTEXT_MESSAGE)
    skills = job_specific_skills(company_name)

    description_line = ""
    if job_context.descriptionSnippet and job_context.descriptionSnippet.strip():
        snippet = _clean(job_context.descriptionSnippet, BLANK_JOB_CONTEXT_MESSAGE)
        description_line = f"- **Job Description Snippet**: {snippet}\n"

    questions_asked = "\n".join(
        _question_line(index, item) for index, item in enumerate(snapshot.generatedQuestions, start=1)
    )

    prompt = secure_prompt_manager.render(
        "job_specific_evaluation",
        company_name=company_name,
        job_title=job_title,
        description_line=description_line,
        questions_asked=questions_asked,
        skill_count=len(skills),
        skills_section=render_skills_section(skills),
        transcript=transcript,
    )
    return PromptBundle(
        prompt=prompt,
        schema=schema_for_mode(InterviewMode.JOB_SPECIFIC.value),
        schemaName=JOB_SPECIFIC_SCHEMA_NAME,
        expectedSkillCount=len(skills),
    )


def build_evaluation_prompt(snapshot: InterviewSnapshot) -> PromptBundle:
    """
    Build the evaluation prompt for an interview.

    Args:
        snapshot (InterviewSnapshot): The loaded interview.

    Returns:
        PromptBundle: Prompt, schema, schema name and expected skill count.

    Raises:
        EvaluationPreconditionError: If the transcript is empty or the mode's
            context (question, job context, generated questions) is missing
            or blank.
    """
    if not snapshot.transcript:
        raise EvaluationPreconditionError(NO_TRANSCRIPT_MESSAGE)

    transcript = format_transcript(snapshot.transcript)

    if snapshot.mode == InterviewMode.QUICK_QUESTION:
        return _build_quick_question(snapshot, transcript)
    if snapshot.mode == InterviewMode.JOB_SPECIFIC:
        return _build_job_specific(snapshot, transcript)
    return _build_full(transcript)
