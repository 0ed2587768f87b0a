"""
Test Evaluation Prompt Builder Module

Tests prompt, schema and expected skill count per interview mode, the
transcript format, and the precondition errors for missing mode context.

Dependencies:
- pytest: For testing framework
- app.services.interview_evaluation.prompt_builder: The module being tested
"""

import pytest
from app.errors.evaluation_errors import EvaluationPreconditionError
from app.schemas.interview_evaluation import InterviewMode, InterviewSnapshot
from app.services.interview_evaluation.prompt_builder import build_evaluation_prompt, format_transcript
from app.test.evaluation_fakes import TRANSCRIPT, USER_ID


def _snapshot(**overrides) -> InterviewSnapshot:
    values = {
        "interviewId": "00000000-0000-0000-0000-000000000001",
        "userId": USER_ID,
        "mode": InterviewMode.FULL,
        "transcript": TRANSCRIPT,
    }
    values.update(overrides)
    return InterviewSnapshot.model_validate(values)

class TestFormatTranscript:

    def test_blocks_are_labelled_and_separated_by_blank_lines(self):
        snapshot = _snapshot()
        assert format_transcript(snapshot.transcript) == (
            "[INTERVIEWER]: Tell me about a time you disagreed with an engineer.\n\n"
            "[CANDIDATE]: At Acme I pushed back on a rewrite and we shipped 3 weeks sooner."
        )

    def test_provider_speaker_labels_are_normalized(self):
        snapshot = _snapshot(transcript=[{"sender": "agent", "message": "Hi"}, {"sender": "user", "message": "Hello"}])
        assert format_transcript(snapshot.transcript) == "[INTERVIEWER]: Hi\n\n[CANDIDATE]: Hello"

class TestFullInterviewPrompt:

    def test_full_interview_uses_twelve_skill_rubric(self):
        bundle = build_evaluation_prompt(_snapshot())
        assert bundle.expectedSkillCount == 12
        assert bundle.schemaName == "interview_evaluation"
        assert bundle.schema_definition["properties"]["skills"]["maxItems"] == 12
        assert bundle.schema_definition["properties"]["overallVerdict"]["enum"] == ["Strong No Hire", "No Hire", "Hire", "Strong Hire"]
        assert "N+STAR+TL" in bundle.prompt
        assert "### 12. Product Mindset (Behavioral Signal)" in bundle.prompt
        assert "[CANDIDATE]: At Acme I pushed back" in bundle.prompt

    def test_empty_transcript_is_a_precondition_error(self):
        with pytest.raises(EvaluationPreconditionError, match="No transcript available for evaluation"):
            build_evaluation_prompt(_snapshot(transcript=[]))

    def test_long_transcript_reaches_the_prompt_whole(self):
        transcript = [
            {"sender": "interviewer" if index % 2 == 0 else "candidate", "message": "x" * 500}
            for index in range(150)
        ]
        transcript.append({"sender": "candidate", "message": "And that is how we cut churn by 12%."})

        bundle = build_evaluation_prompt(_snapshot(transcript=transcript))

        assert len(bundle.prompt) > 75000
        assert "[CANDIDATE]: And that is how we cut churn by 12%." in bundle.prompt

class TestQuickQuestionPrompt:

    def test_behavioral_question_uses_category_rubric(self):
        bundle = build_evaluation_prompt(
            _snapshot(
                mode=InterviewMode.QUICK_QUESTION,
                question={"question": "Tell me about a conflict.", "category": "Behavioral"},
            )
        )
        assert bundle.expectedSkillCount == 4
        assert bundle.schemaName == "quick_question_evaluation"
        assert bundle.schema_definition["properties"]["overallVerdict"]["enum"] == ["Strong", "Good", "Needs Work", "Weak"]
        behavioral_skills = [
            "Story Structure & Clarity",
            "Ownership & Accountability",
            "Impact & Results Orientation",
            "Communication & Executive Presence",
        ]
        for index, name in enumerate(behavioral_skills, start=1):
            assert f"### {index}. {name}" in bundle.prompt
        assert 'Question: "Tell me about a conflict."' in bundle.prompt
        assert "N+STAR+TL Framework" in bundle.prompt

    def test_unknown_category_falls_back_to_behavioral_rubric(self):
        bundle = build_evaluation_prompt(
            _snapshot(
                mode=InterviewMode.QUICK_QUESTION,
                question={"question": "Pick a number.", "category": "Astrology"},
            )
        )
        assert bundle.expectedSkillCount == 4
        assert "### 1. Story Structure & Clarity" in bundle.prompt
        assert "General PM Interview Framework" in bundle.prompt

    def test_missing_question_is_a_precondition_error(self):
        with pytest.raises(EvaluationPreconditionError, match="Question data not found"):
            build_evaluation_prompt(_snapshot(mode=InterviewMode.QUICK_QUESTION))

    @pytest.mark.parametrize(
        "question",
        [
            {"question": "   ", "category": "Behavioral"},
            {"question": "Tell me about a conflict.", "category": ""},
        ],
    )
    def test_blank_question_fields_are_a_precondition_error(self, question):
        with pytest.raises(EvaluationPreconditionError, match="Question text or category is blank"):
            build_evaluation_prompt(_snapshot(mode=InterviewMode.QUICK_QUESTION, question=question))

class TestJobSpecificPrompt:

    def test_company_and_role_are_interpolated(self, job_context, generated_questions):
        bundle = build_evaluation_prompt(
            _snapshot(
                mode=InterviewMode.JOB_SPECIFIC,
                jobContext=job_context,
                generatedQuestions=generated_questions,
            )
        )
        assert bundle.expectedSkillCount == 6
        assert bundle.schemaName == "job_specific_evaluation"
        assert "companyFitAssessment" in bundle.schema_definition["required"]
        assert "mock interview for the PM role at Acme." in bundle.prompt
        assert "deep knowledge of Acme's mission" in bundle.prompt
        assert "would succeed as PM at Acme" in bundle.prompt
        assert "- **Job Description Snippet**: Own the payments roadmap." in bundle.prompt
        assert '1. "Why Acme?" (company)' in bundle.prompt
        assert '2. "Tell me about a product you launched." (role)' in bundle.prompt

    def test_snippet_line_is_omitted_without_snippet(self, generated_questions):
        bundle = build_evaluation_prompt(
            _snapshot(
                mode=InterviewMode.JOB_SPECIFIC,
                jobContext={"companyName": "Acme", "jobTitle": "PM"},
                generatedQuestions=generated_questions,
            )
        )
        assert "Job Description Snippet" not in bundle.prompt

    def test_missing_job_context_is_a_precondition_error(self, generated_questions):
        with pytest.raises(EvaluationPreconditionError, match="Job context not found"):
            build_evaluation_prompt(
                _snapshot(mode=InterviewMode.JOB_SPECIFIC, generatedQuestions=generated_questions)
            )

    def test_empty_generated_questions_is_a_precondition_error(self, job_context):
        with pytest.raises(EvaluationPreconditionError, match="Generated questions not found"):
            build_evaluation_prompt(
                _snapshot(mode=InterviewMode.JOB_SPECIFIC, jobContext=job_context, generatedQuestions=[])
            )

    @pytest.mark.parametrize(
        "blank_context",
        [
            {"companyName": "Acme", "jobTitle": "  "},
            {"companyName": "\t", "jobTitle": "PM"},
        ],
    )
    def test_blank_company_or_title_is_a_precondition_error(self, blank_context, generated_questions):
        with pytest.raises(EvaluationPreconditionError, match="missing a company name or job title"):
            build_evaluation_prompt(
                _snapshot(
                    mode=InterviewMode.JOB_SPECIFIC,
                    jobContext=blank_context,
                    generatedQuestions=generated_questions,
                )
            )

    def test_blank_generated_question_is_a_precondition_error(self, job_context):
        with pytest.raises(EvaluationPreconditionError, match="Generated question text or category is blank"):
            build_evaluation_prompt(
                _snapshot(
                    mode=InterviewMode.JOB_SPECIFIC,
                    jobContext=job_context,
                    generatedQuestions=[{"question": "Why Acme?", "category": " "}],
                )
            )
