from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from app.utils.sanitization import sanitize_string
from app.schemas.task import STATUS_PATTERN, Task


class ProjectCreate(BaseModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    status: str | None = Field(None, pattern=STATUS_PATTERN)
    start_date: date | None = None
    end_date: date | None = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class ProjectUpdate(BaseModel):
    """Every field is optional; only the ones present in the body are written."""
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    status: str | None = Field(None, pattern=STATUS_PATTERN)
    start_date: date | None = None
    end_date: date | None = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("name", "status")
    @classmethod
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class Project(BaseModel):
    id: int
    name: str
    description: str | None = None
    status: str
    start_date: date | None = None
    end_date: date | None = None
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class ProjectList(BaseModel):
    projects: list[Project]


class ProjectDetail(BaseModel):
    project: Project
    tasks: list[Task]


class ProjectMessage(BaseModel):
    message: str
    project: Project
