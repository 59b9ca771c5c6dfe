import logging

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.exceptions import NotFound, ValidationError
from app.models.project import Project
from app.models.tasks import Task
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.schemas.user import Identity
from app.services.patch import apply_patch, build_patch

logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND = "Proyecto no encontrado"
PATCHABLE_COLUMNS = ("name", "description", "status", "start_date", "end_date")


async def list_projects(db: AsyncSession, identity: Identity) -> list[Project]:
    result = await db.execute(
        select(Project)
        .filter(Project.user_id == identity.id)
        .order_by(Project.created_at.desc(), Project.id.desc())
    )
    return result.scalars().all()


async def get_owned_project(db: AsyncSession, identity: Identity, project_id: int) -> Project:
    """Ownership check: the project must exist and belong to the caller."""
    result = await db.execute(
        select(Project).filter(Project.id == project_id, Project.user_id == identity.id)
    )
    project = result.scalars().first()
    if not project:
        raise NotFound(PROJECT_NOT_FOUND)
    return project


async def get_project_with_tasks(
    db: AsyncSession, identity: Identity, project_id: int
) -> tuple[Project, list[Task]]:
    project = await get_owned_project(db, identity, project_id)
    result = await db.execute(
        select(Task)
        .filter(Task.project_id == project.id, Task.user_id == identity.id)
        .order_by(Task.due_date.asc(), Task.id.asc())
    )
    return project, result.scalars().all()


async def create_project(db: AsyncSession, identity: Identity, data: ProjectCreate) -> Project:
    if not data.name:
        raise ValidationError("El nombre del proyecto es requerido")

    project = Project(
        name=data.name,
        description=data.description or None,
        status=data.status or "pending",
        start_date=data.start_date,
        end_date=data.end_date,
        user_id=identity.id,
    )
    db.add(project)
    await db.commit()
    await db.refresh(project)

    logger.info("User %s created project %s", identity.id, project.id)
    return project


async def update_project(
    db: AsyncSession, identity: Identity, project_id: int, data: ProjectUpdate
) -> Project:
    project = await get_owned_project(db, identity, project_id)

    apply_patch(project, build_patch(data, PATCHABLE_COLUMNS))
    await db.commit()
    await db.refresh(project)
    return project


async def delete_project(db: AsyncSession, identity: Identity, project_id: int) -> None:
    """Delete the project and its tasks in a single transaction."""
    project = await get_owned_project(db, identity, project_id)

    try:
        tasks = await db.execute(delete(Task).where(Task.project_id == project.id))
        await db.execute(delete(Project).where(Project.id == project.id))
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise

    logger.info(
        "User %s deleted project %s with %s task(s)", identity.id, project_id, tasks.rowcount
    )
