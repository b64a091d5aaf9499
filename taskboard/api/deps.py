# taskboard/api/deps.py
from typing import Dict, Optional

from fastapi import Depends, Header, Request

from ..core.auth_service import AuthService
from ..core.errors import UnauthorizedError
from ..core.project_service import ProjectService
from ..core.task_service import TaskService


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_project_service(request: Request) -> ProjectService:
    return request.app.state.project_service


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token part of an ``Authorization: Bearer <token>`` header, if any."""
    if not authorization:
        return None
    scheme, _, credentials = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not credentials.strip():
        return None
    return credentials.strip()


def get_current_user(
    authorization: Optional[str] = Header(None),
    auth: AuthService = Depends(get_auth_service),
) -> Dict[str, str]:
    token = bearer_token(authorization)
    if token is None:
        raise UnauthorizedError("Unauthorized")
    return auth.authenticate(token)
