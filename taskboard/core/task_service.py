# taskboard/core/task_service.py
import logging
from typing import Any, Dict, List, Optional

from ..db import BaseStore, Dataset
from ..models import Task, TaskPriority, TaskStatus
from .errors import NotFoundError, UnauthorizedError, ValidationError
from .project_service import find_owned_project
from .utils import new_id, utc_now
from .validation import normalize_due_date, validate_priority, validate_status

logger = logging.getLogger(__name__)


class TaskService:
    """
    CRUD over the tasks collection.

    Tasks carry no owner of their own; access is decided through the parent
    project's ``ownerId``. Listing/creating under a foreign project is a 404,
    while updating/deleting a task in a foreign project is a 401.
    """

    def __init__(self, store: BaseStore):
        self._store = store

    def list(self, user_id: str, project_id: Optional[str], status: Optional[str] = None) -> List[Task]:
        if status is not None:
            status = validate_status(status)
        data = self._store.snapshot()
        if find_owned_project(data["projects"], user_id, project_id) is None:
            raise NotFoundError("Project not found")
        records = [t for t in data["tasks"] if t.get("projectId") == project_id]
        if status is not None:
            records = [t for t in records if t.get("status") == status]
        return [Task(**t) for t in records]

    def create(
        self,
        user_id: str,
        project_id: Optional[str],
        title: Optional[str],
        description: Optional[str] = None,
        priority: Optional[str] = None,
        due_date: Optional[str] = None,
    ) -> Task:
        if not project_id or not title:
            raise ValidationError("Project ID and title are required")
        now = utc_now()
        task = Task(
            id=new_id(),
            project_id=project_id,
            title=title,
            description=description or "",
            status=TaskStatus.TODO,
            priority=validate_priority(priority) if priority else TaskPriority.MEDIUM,
            due_date=normalize_due_date(due_date),
            created_at=now,
            updated_at=now,
        )

        with self._store.transaction() as data:
            if find_owned_project(data["projects"], user_id, project_id) is None:
                raise NotFoundError("Project not found")
            data["tasks"].append(task.to_record())

        logger.info("Task created id=%s project=%s", task.id, project_id)
        return task

    def update(self, user_id: str, task_id: str, patch: Dict[str, Any]) -> Task:
        """
        Merge ``patch`` into the task.

        ``title``, ``status`` and ``priority`` replace only when non-empty;
        ``description`` and ``due_date`` replace whenever the key is present,
        so ``due_date=None`` clears the due date.
        """
        with self._store.transaction() as data:
            record = self._find_for_user(data, user_id, task_id)

            if patch.get("title"):
                record["title"] = patch["title"]
            if "description" in patch:
                record["description"] = patch["description"] or ""
            if patch.get("status"):
                record["status"] = validate_status(patch["status"])
            if patch.get("priority"):
                record["priority"] = validate_priority(patch["priority"])
            if "due_date" in patch:
                record["dueDate"] = normalize_due_date(patch["due_date"])
            record["updatedAt"] = utc_now()
            task = Task(**record)

        logger.info("Task updated id=%s status=%s", task_id, task.status)
        return task

    def delete(self, user_id: str, task_id: str) -> None:
        with self._store.transaction() as data:
            self._find_for_user(data, user_id, task_id)
            data["tasks"] = [t for t in data["tasks"] if t.get("id") != task_id]
        logger.info("Task deleted id=%s", task_id)

    @staticmethod
    def _find_for_user(data: Dataset, user_id: str, task_id: str) -> dict:
        record = next((t for t in data["tasks"] if t.get("id") == task_id), None)
        if record is None:
            raise NotFoundError("Task not found")
        if find_owned_project(data["projects"], user_id, record.get("projectId")) is None:
            raise UnauthorizedError("Unauthorized")
        return record
