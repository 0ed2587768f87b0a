from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from sqlalchemy.exc import IntegrityError
from loguru import logger
from app.errors.exceptions import DuplicateRecordError

def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )

def generic_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred."},
    )

def database_integrity_handler(request: Request, exc: IntegrityError):
    """
    Handle SQLAlchemy integrity constraint violations.

    Converts database errors into user-friendly responses, with special
    handling for duplicate key violations.

    Args:
        request: FastAPI request instance
        exc: IntegrityError from SQLAlchemy

    Returns:
        JSONResponse with 409 status for duplicate keys, 400 otherwise
    """
    error_msg = str(exc.orig).lower()

    if "duplicate key" in error_msg or "unique constraint" in error_msg:
        if "evaluation_job_steps" in error_msg or "uq_evaluation_job_step" in error_msg:
            return http_exception_handler(request, DuplicateRecordError("This evaluation step was already recorded."))
        return http_exception_handler(request, DuplicateRecordError("Record already exists."))

    return JSONResponse(
        status_code=400,
        content={
            "error": "Database error",
            "message": "Data constraint violation",
            "hint": "Please check your data and try again"
        }
    )
