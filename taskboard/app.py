# taskboard/app.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import auth, projects, tasks
from .config import Settings, get_settings
from .core.auth_service import AuthService
from .core.errors import TaskboardError
from .core.project_service import ProjectService
from .core.security import TokenSigner
from .core.task_service import TaskService
from .db import BaseStore, JsonFileStore

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    msg = first.get("msg", "invalid value")
    return f"Invalid request: {loc}: {msg}" if loc else f"Invalid request: {msg}"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskboardError)
    async def taskboard_error_handler(request: Request, exc: TaskboardError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
            return _error(exc.status_code, INTERNAL_ERROR)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(400, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, INTERNAL_ERROR)


def create_app(settings: Optional[Settings] = None, store: Optional[BaseStore] = None) -> FastAPI:
    """
    Build the API. ``store`` defaults to the JSON file at ``settings.data_path``;
    tests pass a MemoryStore instead.
    """
    settings = settings or get_settings()
    if store is None:
        store = JsonFileStore(settings.data_path)
    signer = TokenSigner(settings.secret_key, ttl_seconds=settings.token_ttl_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("%s started, storage counts=%s", settings.app_name, store.counts())
        yield
        logger.info("%s stopped", settings.app_name)

    app = FastAPI(title="Taskboard API", lifespan=lifespan)

    app.state.settings = settings
    app.state.store = store
    app.state.auth_service = AuthService(store, signer, bcrypt_rounds=settings.bcrypt_rounds)
    app.state.project_service = ProjectService(store)
    app.state.task_service = TaskService(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(projects.router, prefix=settings.api_prefix)
    app.include_router(tasks.router, prefix=settings.api_prefix)

    @app.get(f"{settings.api_prefix}/health")
    async def health():
        return {"success": True, "status": "ok"}

    return app
