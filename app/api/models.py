"""
Pydantic models for request validation
"""
from pydantic import BaseModel, field_validator


class TaskRequest(BaseModel):
    task: str

    @field_validator("task", mode="before")
    @classmethod
    def strip_task(cls, value):
        if not isinstance(value, str):
            raise ValueError("task must be a string")
        return value.strip()


class ToolInfo(BaseModel):
    name: str
    description: str
