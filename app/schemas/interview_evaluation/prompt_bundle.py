"""
Description:
The output of the prompt builder: rendered prompt, structured-output schema
and the skill count the completion must contain.

Dependencies:
- pydantic: For data validation and settings management.
"""
from typing import Any, Dict

from pydantic import BaseModel, Field


class PromptBundle(BaseModel):
    prompt: str = Field(..., description="Rendered evaluation prompt")
    schema_definition: Dict[str, Any] = Field(..., alias="schema", description="JSON schema the completion must follow")
    schemaName: str
    expectedSkillCount: int

    model_config = {"populate_by_name": True}
