"""
Description:
This module defines the schema for health check responses using Pydantic.

Dependencies:
- pydantic: For data validation and settings management.
"""
from pydantic import BaseModel, Field

class HealthResponse(BaseModel):
    """
    Schema for health check endpoint responses.
    """
    status: str = Field(..., description="Service status, 'ok' when the service is up")
