# taskboard/api/projects.py
from typing import Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..core.project_service import ProjectService
from .deps import get_current_user, get_project_service

router = APIRouter(prefix="/projects", tags=["projects"])


class ProjectCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


@router.get("")
def list_projects(
    user: Dict[str, str] = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    return {"success": True, "projects": [p.to_record() for p in projects.list(user["id"])]}


@router.post("")
def create_project(
    body: ProjectCreate,
    user: Dict[str, str] = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    project = projects.create(user["id"], body.name, body.description)
    return {"success": True, "project": project.to_record()}


@router.get("/{project_id}")
def get_project(
    project_id: str,
    user: Dict[str, str] = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    return {"success": True, "project": projects.get(user["id"], project_id).to_record()}


@router.put("/{project_id}")
def update_project(
    project_id: str,
    body: ProjectUpdate,
    user: Dict[str, str] = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    # exclude_unset keeps "description absent" apart from "description set to empty"
    project = projects.update(user["id"], project_id, body.model_dump(exclude_unset=True))
    return {"success": True, "project": project.to_record()}


@router.delete("/{project_id}")
def delete_project(
    project_id: str,
    user: Dict[str, str] = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    projects.delete(user["id"], project_id)
    return {"success": True}
