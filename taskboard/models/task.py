# taskboard/models/task.py
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TaskStatus(str, Enum):
    """
    Board columns. The usual flow is todo -> in-progress -> done, but any
    status may be set directly; transitions are not enforced.
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(BaseModel):
    id: str
    project_id: str = Field(alias="projectId")
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[str] = Field(None, alias="dueDate")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")

    class Config:
        populate_by_name = True
        use_enum_values = True

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)
