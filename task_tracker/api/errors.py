"""Mapping of task errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..domain.errors import (
    InvalidOperationError,
    TaskError,
    TaskNotFoundError,
    TaskValidationError,
)

logger = logging.getLogger(__name__)


def status_code_for(error: TaskError) -> int:
    """HTTP status for a task error."""
    if isinstance(error, TaskNotFoundError):
        return 404
    if isinstance(error, (TaskValidationError, InvalidOperationError)):
        return 400
    return 500


async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
    """Render a task error as a JSON body with the mapped status."""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        message = "Internal server error"
    else:
        logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc}")
        message = str(exc)

    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "message": message},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskError, task_error_handler)
