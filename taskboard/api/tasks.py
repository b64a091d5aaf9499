# taskboard/api/tasks.py
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from ..core.task_service import TaskService
from .deps import get_current_user, get_task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])


class TaskCreate(BaseModel):
    project_id: Optional[str] = Field(None, alias="projectId")
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[str] = Field(None, alias="dueDate")

    class Config:
        populate_by_name = True


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[str] = Field(None, alias="dueDate")

    class Config:
        populate_by_name = True


@router.get("")
def list_tasks(
    project_id: Optional[str] = Query(None, alias="projectId"),
    status: Optional[str] = None,
    user: Dict[str, str] = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    found = tasks.list(user["id"], project_id, status=status)
    return {"success": True, "tasks": [t.to_record() for t in found]}


@router.post("")
def create_task(
    body: TaskCreate,
    user: Dict[str, str] = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    task = tasks.create(
        user["id"],
        body.project_id,
        body.title,
        description=body.description,
        priority=body.priority,
        due_date=body.due_date,
    )
    return {"success": True, "task": task.to_record()}


@router.put("/{task_id}")
def update_task(
    task_id: str,
    body: TaskUpdate,
    user: Dict[str, str] = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    task = tasks.update(user["id"], task_id, body.model_dump(exclude_unset=True))
    return {"success": True, "task": task.to_record()}


@router.delete("/{task_id}")
def delete_task(
    task_id: str,
    user: Dict[str, str] = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    tasks.delete(user["id"], task_id)
    return {"success": True}
