# gradebook/api/exceptions/handlers.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gradebook.exceptions import GradebookError, InvalidInputError
from gradebook.logging_config import app_logger
from gradebook.schema.base import BaseResponse


async def gradebook_error_handler(request: Request, exc: GradebookError) -> JSONResponse:
    if isinstance(exc, InvalidInputError):
        app_logger.warning(f"Rejected grade input on {request.url.path}: {exc.message}")
    else:
        app_logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")

    body = BaseResponse(
        status=False,
        message=exc.message,
        error={"type": type(exc).__name__, "detail": exc.detail},
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


def register_handlers(app: FastAPI):
    app.add_exception_handler(GradebookError, gradebook_error_handler)
