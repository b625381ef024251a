from pydantic import BaseModel, Field
from typing import List


class ExecuteRequest(BaseModel):
    text: str = Field(..., description="Raw text to scan for identifiers")


class SaveResult(BaseModel):
    new_count: int = 0
    duplicate_count: int = 0
    new_ids: List[str] = Field(default_factory=list)


class ProcessResult(SaveResult):
    total_found: int = Field(..., description="Sequential identifiers found in the input")
