# taskboard/core/project_service.py
import logging
from typing import Any, Dict, List, Optional

from ..db import BaseStore
from ..models import Project
from .errors import NotFoundError
from .utils import new_id, utc_now
from .validation import validate_project_description, validate_project_name

logger = logging.getLogger(__name__)


def find_owned_project(
    projects: List[dict], user_id: str, project_id: Optional[str]
) -> Optional[dict]:
    """Project record with this id owned by ``user_id``, or None."""
    if not project_id:
        return None
    for record in projects:
        if record.get("id") == project_id and record.get("ownerId") == user_id:
            return record
    return None


class ProjectService:
    """CRUD over the projects collection, scoped to the owning user."""

    def __init__(self, store: BaseStore):
        self._store = store

    def list(self, user_id: str) -> List[Project]:
        return [Project(**p) for p in self._store.read("projects") if p.get("ownerId") == user_id]

    def get(self, user_id: str, project_id: str) -> Project:
        record = find_owned_project(self._store.read("projects"), user_id, project_id)
        if record is None:
            raise NotFoundError("Project not found")
        return Project(**record)

    def create(self, user_id: str, name: Optional[str], description: Optional[str] = None) -> Project:
        name = validate_project_name(name)
        description = validate_project_description(description)
        now = utc_now()
        project = Project(
            id=new_id(),
            name=name,
            description=description,
            owner_id=user_id,
            created_at=now,
            updated_at=now,
        )
        with self._store.transaction() as data:
            data["projects"].append(project.to_record())
        logger.info("Project created id=%s owner=%s", project.id, user_id)
        return project

    def update(self, user_id: str, project_id: str, patch: Dict[str, Any]) -> Project:
        """
        Merge ``patch`` into the project.

        ``name`` replaces only when non-empty; ``description`` replaces whenever
        the key is present, so an empty string clears it.
        """
        with self._store.transaction() as data:
            record = find_owned_project(data["projects"], user_id, project_id)
            if record is None:
                raise NotFoundError("Project not found")

            if patch.get("name"):
                record["name"] = validate_project_name(patch["name"])
            if "description" in patch:
                record["description"] = validate_project_description(patch["description"])
            record["updatedAt"] = utc_now()
            project = Project(**record)

        logger.info("Project updated id=%s", project_id)
        return project

    def delete(self, user_id: str, project_id: str) -> None:
        with self._store.transaction() as data:
            if find_owned_project(data["projects"], user_id, project_id) is None:
                raise NotFoundError("Project not found")
            before = len(data["tasks"])
            data["tasks"] = [t for t in data["tasks"] if t.get("projectId") != project_id]
            data["projects"] = [p for p in data["projects"] if p.get("id") != project_id]
            removed = before - len(data["tasks"])

        logger.info("Project deleted id=%s cascaded_tasks=%d", project_id, removed)
