# taskboard/api/auth.py
from typing import Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..core.auth_service import AuthService
from .deps import get_auth_service, get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])


class SignupRequest(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    password: Optional[str] = None


class SigninRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


@router.post("/signup", status_code=201)
def signup(body: SignupRequest, auth: AuthService = Depends(get_auth_service)):
    user, token = auth.signup(body.email, body.name, body.password)
    return {"success": True, "user": user, "token": token}


@router.post("/signin")
def signin(body: SigninRequest, auth: AuthService = Depends(get_auth_service)):
    user, token = auth.signin(body.email, body.password)
    return {"success": True, "user": user, "token": token}


@router.get("/me")
def me(user: Dict[str, str] = Depends(get_current_user)):
    """Claims of the presented token; used by clients to restore a session."""
    return {"success": True, "user": user}
