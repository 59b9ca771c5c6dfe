from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db, get_current_user
from app.exceptions import handles_errors
from app.schemas.project import (ProjectCreate, ProjectDetail, ProjectList, ProjectMessage, ProjectUpdate)
from app.schemas.user import Identity
from app.services import projects as project_service

router = APIRouter(prefix="/projects", tags=["projects"])

@router.get("", response_model=ProjectList)
@handles_errors("Error al obtener proyectos")
async def list_projects(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return {"projects": await project_service.list_projects(db, current_user)}

@router.get("/{project_id}", response_model=ProjectDetail)
@handles_errors("Error al obtener proyecto")
async def get_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    project, tasks = await project_service.get_project_with_tasks(db, current_user, project_id)
    return {"project": project, "tasks": tasks}

@router.post("", response_model=ProjectMessage, status_code=status.HTTP_201_CREATED)
@handles_errors("Error al crear proyecto")
async def create_project(
    project_data: ProjectCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    project = await project_service.create_project(db, current_user, project_data)
    return {"message": "Proyecto creado exitosamente", "project": project}

@router.put("/{project_id}", response_model=ProjectMessage)
@handles_errors("Error al actualizar proyecto")
async def update_project(
    project_id: int,
    update_data: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    project = await project_service.update_project(db, current_user, project_id, update_data)
    return {"message": "Proyecto actualizado exitosamente", "project": project}

@router.delete("/{project_id}")
@handles_errors("Error al eliminar proyecto")
async def delete_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    await project_service.delete_project(db, current_user, project_id)
    return {"message": "Proyecto eliminado exitosamente"}
