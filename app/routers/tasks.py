from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db, get_current_user
from app.exceptions import handles_errors
from app.schemas.task import (ProjectTasks, TaskCreate, TaskDetail, TaskList, TaskMessage, TaskUpdate)
from app.schemas.user import Identity
from app.services import tasks as task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])

@router.get("", response_model=TaskList)
@handles_errors("Error al obtener tareas")
async def list_tasks(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return {"tasks": await task_service.list_tasks(db, current_user)}

@router.get("/project/{project_id}", response_model=ProjectTasks)
@handles_errors("Error al obtener tareas por proyecto")
async def get_tasks_by_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    project, tasks = await task_service.get_tasks_by_project(db, current_user, project_id)
    return {"project_id": project.id, "project_name": project.name, "tasks": tasks}

@router.get("/{task_id}", response_model=TaskDetail)
@handles_errors("Error al obtener tarea")
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return {"task": await task_service.get_task_by_id(db, current_user, task_id)}

@router.post("", response_model=TaskMessage, status_code=status.HTTP_201_CREATED)
@handles_errors("Error al crear tarea")
async def create_task(
    task_data: TaskCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    task = await task_service.create_task(db, current_user, task_data)
    return {"message": "Tarea creada exitosamente", "task": task}

@router.put("/{task_id}", response_model=TaskMessage)
@handles_errors("Error al actualizar tarea")
async def update_task(
    task_id: int,
    update_data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    task = await task_service.update_task(db, current_user, task_id, update_data)
    return {"message": "Tarea actualizada exitosamente", "task": task}

@router.delete("/{task_id}")
@handles_errors("Error al eliminar tarea")
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    await task_service.delete_task(db, current_user, task_id)
    return {"message": "Tarea eliminada exitosamente"}
