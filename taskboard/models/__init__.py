# taskboard/models/__init__.py
from .user import User
from .project import Project
from .task import Task, TaskPriority, TaskStatus
