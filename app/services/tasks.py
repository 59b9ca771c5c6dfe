import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.exceptions import NotFound, ValidationError
from app.models.project import Project
from app.models.tasks import Task
from app.schemas.task import TaskCreate, TaskUpdate
from app.schemas.user import Identity
from app.services.patch import apply_patch, build_patch
from app.services.projects import get_owned_project

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Tarea no encontrada"
PATCHABLE_COLUMNS = ("title", "description", "status", "priority", "due_date", "project_id")


def _owned_tasks(identity: Identity):
    # project_name comes from the joined-eager Task.project relationship
    return select(Task).filter(Task.user_id == identity.id)


async def list_tasks(db: AsyncSession, identity: Identity) -> list[Task]:
    result = await db.execute(
        _owned_tasks(identity).order_by(Task.due_date.asc(), Task.id.asc())
    )
    return result.scalars().all()


async def get_task_by_id(db: AsyncSession, identity: Identity, task_id: int) -> Task:
    result = await db.execute(
        _owned_tasks(identity)
        .filter(Task.id == task_id)
        .execution_options(populate_existing=True)
    )
    task = result.scalars().first()
    if not task:
        raise NotFound(TASK_NOT_FOUND)
    return task


async def get_tasks_by_project(
    db: AsyncSession, identity: Identity, project_id: int
) -> tuple[Project, list[Task]]:
    project = await get_owned_project(db, identity, project_id)
    result = await db.execute(
        _owned_tasks(identity)
        .filter(Task.project_id == project.id)
        .order_by(Task.due_date.asc(), Task.id.asc())
    )
    return project, result.scalars().all()


async def create_task(db: AsyncSession, identity: Identity, data: TaskCreate) -> Task:
    if not data.title:
        raise ValidationError("El título de la tarea es requerido")

    if data.project_id is not None:
        await get_owned_project(db, identity, data.project_id)

    task = Task(
        title=data.title,
        description=data.description or None,
        status=data.status or "pending",
        priority=data.priority or "medium",
        due_date=data.due_date,
        project_id=data.project_id,
        user_id=identity.id,
    )
    db.add(task)
    await db.commit()

    logger.info("User %s created task %s", identity.id, task.id)
    return await get_task_by_id(db, identity, task.id)


async def update_task(db: AsyncSession, identity: Identity, task_id: int, data: TaskUpdate) -> Task:
    task = await get_task_by_id(db, identity, task_id)

    patch = build_patch(data, PATCHABLE_COLUMNS)
    # A new project must belong to the caller; null just detaches the task
    if data.project_id is not None:
        await get_owned_project(db, identity, data.project_id)

    apply_patch(task, patch)
    await db.commit()
    return await get_task_by_id(db, identity, task_id)


async def delete_task(db: AsyncSession, identity: Identity, task_id: int) -> None:
    task = await get_task_by_id(db, identity, task_id)
    await db.execute(delete(Task).where(Task.id == task.id))
    await db.commit()
    logger.info("User %s deleted task %s", identity.id, task_id)
