"""
Test Interview Evaluation Job Module

Tests the whole job against an in-memory database and a fake completion
client: the happy path per mode, checkpoint replay across retries, the retry
policy and the failure signal.

Dependencies:
- pytest: For testing framework
- pytest-asyncio: For async test support
- app.services.interview_evaluation.evaluation_job: The module being tested
"""

import uuid
from types import SimpleNamespace
from datetime import datetime, timezone

import pytest
from sqlalchemy import select

from app.models.interview_models import EvaluationJobStep, MockInterview
from app.schemas.interview_evaluation import EvaluationRequestedData, EvaluationRequestedEvent
from app.services.interview_evaluation.completion_service import CompletionService
from app.services.interview_evaluation.evaluation_job import EvaluationJob
from app.services.interview_evaluation.failure_handler import EvaluationFailureHandler
from app.services.interview_evaluation.step_runner import StepRunner
from app.test.evaluation_fakes import (
    FakeCompletionClient,
    USER_ID,
    completed_response,
    make_evaluation,
    no_sleep,
    status_response,
)

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _event(interview_id: str, event_id: str = "evt-1") -> EvaluationRequestedEvent:
    return EvaluationRequestedEvent(
        id=event_id, data=EvaluationRequestedData(interviewId=interview_id, userId=USER_ID)
    )


def _job(session_factory, client, max_attempts: int = 60) -> EvaluationJob:
    service = CompletionService(client, model="gpt-4.1", poll_interval=0, max_attempts=max_attempts, sleep=no_sleep)
    return EvaluationJob(session_factory, service, clock=lambda: FIXED_NOW)


def _interview(session, interview_id: str) -> MockInterview:
    session.expire_all()
    return session.get(MockInterview, uuid.UUID(interview_id))

class TestEvaluationJobSuccess:

    @pytest.mark.asyncio
    async def test_full_interview_is_evaluated(self, session, session_factory, make_interview):
        interview_id = make_interview(evaluation_status="pending")
        client = FakeCompletionClient([status_response("queued"), completed_response(make_evaluation())])

        result = await _job(session_factory, client).run(_event(interview_id))

        assert result.to_dict() == {
            "success": True,
            "interviewId": interview_id,
            "skillsEvaluated": 12,
            "verdict": "Hire",
        }
        interview = _interview(session, interview_id)
        assert interview.evaluation_status == "completed"
        assert interview.evaluation["evaluatedAt"] == FIXED_NOW.isoformat()
        assert len(client.responses.create_calls) == 1

    @pytest.mark.asyncio
    async def test_job_specific_interview_is_evaluated(
        self, session, session_factory, make_interview, job_context, generated_questions, job_specific_evaluation
    ):
        interview_id = make_interview(
            interview_mode="job_specific",
            job_context=job_context,
            generated_questions=generated_questions,
            evaluation_status="pending",
        )
        client = FakeCompletionClient([completed_response(job_specific_evaluation)])

        result = await _job(session_factory, client).run(_event(interview_id))

        assert result.success is True
        assert result.skillsEvaluated == 6
        call = client.responses.create_calls[0]
        assert call["text"]["format"]["name"] == "job_specific_evaluation"
        assert "Acme" in call["input"][0]["content"][0]["text"]
        assert _interview(session, interview_id).evaluation["jobContext"]["companyName"] == "Acme"

    @pytest.mark.asyncio
    async def test_every_step_is_checkpointed(self, session, session_factory, make_interview):
        interview_id = make_interview(evaluation_status="pending")
        client = FakeCompletionClient([completed_response(make_evaluation())])

        await _job(session_factory, client).run(_event(interview_id))

        steps = session.execute(
            select(EvaluationJobStep.step_name).where(EvaluationJobStep.job_id == "evt-1").order_by(EvaluationJobStep.id)
        ).scalars().all()
        assert steps == [
            "fetch-interview-data",
            "build-prompt",
            "create-completion",
            "poll-for-completion",
            "save-evaluation",
        ]

class TestEvaluationJobRetries:

    @pytest.mark.asyncio
    async def test_retry_does_not_resubmit_the_completion(self, session, session_factory, make_interview):
        interview_id = make_interview(evaluation_status="pending")
        # The first attempt times out after two checks; the retry finds the result
        client = FakeCompletionClient(
            [
                status_response("in_progress"),
                status_response("in_progress"),
                completed_response(make_evaluation()),
            ]
        )

        result = await _job(session_factory, client, max_attempts=2).run(_event(interview_id))

        assert result.success is True
        assert len(client.responses.create_calls) == 1
        assert _interview(session, interview_id).evaluation_status == "completed"

    @pytest.mark.asyncio
    async def test_timeout_on_both_attempts_marks_failed(self, session, session_factory, make_interview):
        interview_id = make_interview(evaluation_status="pending")
        client = FakeCompletionClient([status_response("in_progress")])

        result = await _job(session_factory, client, max_attempts=3).run(_event(interview_id))

        assert result.success is False
        assert len(client.responses.retrieve_calls) == 6
        interview = _interview(session, interview_id)
        assert interview.evaluation_status == "failed"
        assert interview.evaluation_error == "Timeout waiting for completion response after 3 status checks"
        assert interview.evaluation is None

    @pytest.mark.asyncio
    async def test_refusal_message_reaches_the_record(self, session, session_factory, make_interview):
        interview_id = make_interview(evaluation_status="pending")
        refusal = status_response(
            "completed",
            output=[
                _message([{"type": "refusal", "refusal": "I can't evaluate this content."}]),
            ],
        )
        client = FakeCompletionClient([refusal])

        result = await _job(session_factory, client).run(_event(interview_id))

        assert result.success is False
        assert "I can't evaluate this content." in _interview(session, interview_id).evaluation_error

    @pytest.mark.asyncio
    async def test_wrong_skill_count_fails_without_retry(self, session, session_factory, make_interview):
        interview_id = make_interview(evaluation_status="pending")
        client = FakeCompletionClient([completed_response(make_evaluation(skill_count=11))])

        result = await _job(session_factory, client).run(_event(interview_id))

        assert result.success is False
        assert len(client.responses.retrieve_calls) == 1
        interview = _interview(session, interview_id)
        assert interview.evaluation_error == "Expected 12 skill evaluations, got 11"
        assert interview.evaluation is None

    @pytest.mark.asyncio
    async def test_missing_job_context_makes_no_completion_call(self, session, session_factory, make_interview):
        interview_id = make_interview(interview_mode="job_specific", evaluation_status="pending")
        client = FakeCompletionClient([completed_response(make_evaluation())])

        result = await _job(session_factory, client).run(_event(interview_id))

        assert result.error == "Job context not found for job-specific interview"
        assert client.responses.create_calls == []
        assert _interview(session, interview_id).evaluation_status == "failed"

    @pytest.mark.asyncio
    async def test_blank_job_title_fails_on_the_first_attempt(
        self, session, session_factory, make_interview, generated_questions
    ):
        interview_id = make_interview(
            interview_mode="job_specific",
            job_context={"companyName": "Acme", "jobTitle": "  "},
            generated_questions=generated_questions,
            evaluation_status="pending",
        )
        client = FakeCompletionClient([completed_response(make_evaluation())])
        opened = []

        def counting_factory():
            opened.append(1)
            return session_factory()

        service = CompletionService(client, model="gpt-4.1", poll_interval=0, sleep=no_sleep)
        job = EvaluationJob(counting_factory, service, failure_handler=EvaluationFailureHandler(session_factory))

        result = await job.run(_event(interview_id))

        assert result.error == "Job context is missing a company name or job title"
        assert len(opened) == 1
        assert client.responses.create_calls == []
        assert _interview(session, interview_id).evaluation_error == result.error

    @pytest.mark.asyncio
    async def test_other_users_interview_is_not_found(self, session, session_factory, make_interview):
        interview_id = make_interview(user_id="someone-else", evaluation_status="pending")
        client = FakeCompletionClient([completed_response(make_evaluation())])

        result = await _job(session_factory, client).run(_event(interview_id))

        assert result.error == "Interview not found"
        assert client.responses.create_calls == []
        assert _interview(session, interview_id).evaluation_status == "pending"

class TestStepRunner:

    @pytest.mark.asyncio
    async def test_completed_step_is_replayed(self, session):
        calls = []

        async def step():
            calls.append(1)
            return {"value": len(calls)}

        runner = StepRunner(session, "job-1")
        assert await runner.run("step", step) == {"value": 1}
        assert await StepRunner(session, "job-1").run("step", step) == {"value": 1}
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_failed_step_is_not_checkpointed(self, session):
        async def failing():
            raise RuntimeError("boom")

        runner = StepRunner(session, "job-1")
        with pytest.raises(RuntimeError):
            await runner.run("step", failing)
        assert runner.completed("step") is False


def _message(content):
    return SimpleNamespace(type="message", content=[SimpleNamespace(**item) for item in content])
