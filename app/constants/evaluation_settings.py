"""
Description:
Runtime settings for the interview evaluation job, read from the environment.

Dependencies:
- os: For environment variable access.
- dotenv: For loading environment variables from a .env file.
"""
import os
from dotenv import load_dotenv

load_dotenv()

EVALUATION_FUNCTION_ID = "evaluate-interview"
EVALUATION_REQUESTED_EVENT = "interview/evaluation.requested"

EVALUATION_MODEL = os.getenv("EVALUATION_MODEL", "gpt-4.1")

# 60 checks every 2 seconds bounds a job at roughly two minutes of polling
POLL_INTERVAL_SECONDS = float(os.getenv("EVALUATION_POLL_INTERVAL_SECONDS", "2"))
MAX_POLL_ATTEMPTS = int(os.getenv("EVALUATION_MAX_POLL_ATTEMPTS", "60"))

# Job-level retries after the first attempt
JOB_RETRIES = int(os.getenv("EVALUATION_JOB_RETRIES", "1"))

UNKNOWN_FAILURE_MESSAGE = "Unknown error occurred"
