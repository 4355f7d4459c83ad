import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .db import Database
from .errors import TaskTrackerError
from .logging_setup import setup_logging
from .repositories import TaskRepository
from .routers import tasks as tasks_router
from .services import TaskService
from .settings import Settings, get_settings
from .utils import error_envelope, status_for

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "tasks",
        "description": "Create tasks, list the recent incomplete ones, and mark tasks completed.",
    },
]


def _install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskTrackerError)
    async def task_error_handler(request: Request, exc: TaskTrackerError) -> JSONResponse:
        """
        Map the task error taxonomy to its status code.

        Response format:
            {"success": false, "message": "..."}
        """
        code = status_for(exc)
        if code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(status_code=code, content=error_envelope(exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return the failure envelope for malformed requests (wrong JSON types,
        non-integer ids), with the pydantic error list under "detail".
        """
        return JSONResponse(
            status_code=400,
            content=error_envelope("Request validation failed", detail=jsonable_encoder(exc.errors())),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Routing errors (unknown path, wrong method) in the same envelope."""
        message = exc.detail if isinstance(exc.detail, str) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Fallback for anything else: status from the error if present, else 500,
        and "Internal server error" when the error has no message.
        """
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        message = getattr(exc, "message", None) or str(exc)
        return JSONResponse(status_code=status_for(exc), content=error_envelope(message))


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Database, TaskRepository and TaskService are constructed here and the
    service is kept on app.state, so every app owns its own storage handle.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Task Tracker",
        description="Backend API for creating tasks, listing recent incomplete tasks, and completing them.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )

    db = Database(settings.sqlite_db_path, timeout=settings.db_timeout)
    app.state.settings = settings
    app.state.db = db
    app.state.task_service = TaskService(TaskRepository(db))

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _install_exception_handlers(app)

    # PUBLIC_INTERFACE
    @app.get("/health", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and database reachability.
        """
        return {
            "status": "ok",
            "message": "Todo API is running",
            "database": "ok" if db.ping() else "unavailable",
        }

    app.include_router(tasks_router.router, prefix=settings.api_prefix)
    logger.info("Task Tracker app created prefix=%r db=%s", settings.api_prefix, settings.sqlite_db_path)
    return app
