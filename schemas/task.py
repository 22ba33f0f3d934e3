"""
Declarative task schema. The validation layer (app/validation.py) runs request
bodies through TaskInput; TaskOut and TaskPage describe the responses.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.member import MemberOut

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Status(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "inprogress"
    DONE = "done"


class TaskInput(BaseModel):
    """Writable task fields, shared by create and update."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    # Absent means no description; an explicit null is rejected
    description: str = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    priority: Priority = Priority.MEDIUM
    status: Status = Status.TODO
    assignee: Optional[str] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")

    @field_validator("assignee", "due_date", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        if value == "":
            return None
        return value


class TaskOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: Optional[str] = None
    priority: Priority
    status: Status
    assignee: Optional[MemberOut] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


class TaskPage(BaseModel):
    page: int
    limit: int
    total: int
    tasks: List[TaskOut]
