from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from app.utils.sanitization import sanitize_string

from app.models.project import STATUSES
from app.models.tasks import PRIORITIES

STATUS_PATTERN = rf"^({'|'.join(STATUSES)})$"
PRIORITY_PATTERN = rf"^({'|'.join(PRIORITIES)})$"


class TaskCreate(BaseModel):
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    status: str | None = Field(None, pattern=STATUS_PATTERN)
    priority: str | None = Field(None, pattern=PRIORITY_PATTERN)
    due_date: date | None = None
    project_id: int | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class TaskUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    status: str | None = Field(None, pattern=STATUS_PATTERN)
    priority: str | None = Field(None, pattern=PRIORITY_PATTERN)
    due_date: date | None = None
    project_id: int | None = None  # explicit null detaches the task

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("title", "status", "priority")
    @classmethod
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class Task(BaseModel):
    id: int
    title: str
    description: str | None = None
    status: str
    priority: str
    due_date: date | None = None
    project_id: int | None = None
    project_name: str | None = None
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class TaskList(BaseModel):
    tasks: list[Task]


class TaskDetail(BaseModel):
    task: Task


class TaskMessage(BaseModel):
    message: str
    task: Task


class ProjectTasks(BaseModel):
    project_id: int
    project_name: str
    tasks: list[Task]
