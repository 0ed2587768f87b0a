"""
Interview Evaluation Service Module

This module scores finished mock interviews in the background: it loads the
transcript, builds a mode-specific prompt, requests a structured evaluation
from the completion service and stores the result on the interview record.
"""

from .completion_service import CompletionService
from .evaluation_job import EvaluationJob, JobResult, run_evaluation_job
from .failure_handler import EvaluationFailureHandler
from .prompt_builder import build_evaluation_prompt
from .step_runner import StepRunner

__all__ = [
    "CompletionService",
    "EvaluationJob",
    "JobResult",
    "run_evaluation_job",
    "EvaluationFailureHandler",
    "build_evaluation_prompt",
    "StepRunner",
]
