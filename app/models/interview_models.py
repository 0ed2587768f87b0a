"""Interview Models Module

This module defines SQLAlchemy models for mock interview evaluation: the
mock interview record the evaluation is written onto, the PM question bank
quick-question sessions draw from, and the step checkpoints that let an
evaluation job resume without repeating finished work.

Dependencies:
- sqlalchemy: For ORM functionality and database modeling.
- uuid: For UUID generation for primary keys.
- datetime: For timestamp handling.
- typing: For type annotations and optional fields.
"""

import uuid
from typing import Any, List, Optional
from sqlalchemy import ForeignKey, String, Text, DateTime, func, JSON, Uuid, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from datetime import datetime

class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    Provides the foundation for all database models in the application.
    """
    pass

class PMInterviewQuestion(Base):
    """Question bank entry used by quick-question practice.

    Attributes:
        id (UUID): Primary key, auto-generated UUID
        category (str): Question category (Behavioral, Product Sense, ...)
        question (str): The question text
        guidance (str, optional): Coaching notes shown alongside the question
        interviews (List[MockInterview]): Practice sessions that used this question
    """
    __tablename__ = "pm_interview_questions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    category: Mapped[str] = mapped_column(String(50))
    question: Mapped[str] = mapped_column(String(1000))
    guidance: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    interviews: Mapped[List["MockInterview"]] = relationship("MockInterview", back_populates="question")

    def __repr__(self):
        return f"PMInterviewQuestion(id={self.id}, category={self.category})"

class MockInterview(Base):
    """Mock interview session and its AI evaluation.

    The transcript is appended to during the live conversation and is not
    touched once an evaluation starts. The evaluation columns are written
    by the evaluation job only: the result persister on success, the
    failure handler on failure.

    Attributes:
        id (UUID): Primary key, auto-generated UUID
        user_id (str): Owning user's uid
        interview_mode (str, optional): full, quick_question or job_specific
        transcript (list): Ordered {sender, message} exchanges
        question_id (UUID, optional): Question bank entry for quick-question practice
        adhoc_question (dict, optional): Practice question not drawn from the bank
        job_context (dict, optional): Company/role context for job-specific interviews
        generated_questions (list, optional): Questions asked in a job-specific interview
        evaluation (dict, optional): Stored structured evaluation
        evaluation_status (str, optional): pending, completed or failed
        evaluation_error (str, optional): Failure message shown to the user
        evaluation_created_at (datetime, optional): When the evaluation was produced
    """
    __tablename__ = "mock_interviews"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(128), index=True)
    interview_mode: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    transcript: Mapped[Optional[List[Any]]] = mapped_column(JSON, nullable=True)
    question_id: Mapped[Optional[uuid.UUID]] = mapped_column(ForeignKey("pm_interview_questions.id"), nullable=True)
    adhoc_question: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    job_context: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    generated_questions: Mapped[Optional[List[Any]]] = mapped_column(JSON, nullable=True)
    evaluation: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    evaluation_status: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    evaluation_error: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    evaluation_created_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())
    # Establish many-to-one relationship with PMInterviewQuestion
    question: Mapped[Optional["PMInterviewQuestion"]] = relationship("PMInterviewQuestion", back_populates="interviews")

    def __repr__(self):
        return f"MockInterview(id={self.id}, mode={self.interview_mode}, evaluation_status={self.evaluation_status})"

class EvaluationJobStep(Base):
    """Checkpoint of one completed evaluation job step.

    Attributes:
        id (int): Primary key, auto-incrementing
        job_id (str): Id of the event that started the job
        step_name (str): Name of the completed step
        output (Any): JSON output of the step, replayed on re-runs
        completed_at (datetime): When the step finished
    """
    __tablename__ = "evaluation_job_steps"
    __table_args__ = (UniqueConstraint("job_id", "step_name", name="uq_evaluation_job_step"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    job_id: Mapped[str] = mapped_column(String(64), index=True)
    step_name: Mapped[str] = mapped_column(String(64))
    output: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    completed_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())

    def __repr__(self):
        return f"EvaluationJobStep(job_id={self.job_id}, step_name={self.step_name})"
