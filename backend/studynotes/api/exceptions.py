from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from ..exceptions import StudyNotesException
import logging

logger = logging.getLogger(__name__)


async def studynotes_exception_handler(request: Request, exc: StudyNotesException):
    """Handle application exceptions"""
    if exc.status_code >= 500:
        logger.error(f"Application error: {exc.detail} - {request.url.path}")
    else:
        logger.warning(f"Request rejected ({exc.status_code}): {exc.detail} - {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=exc.headers
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request body validation errors; submitted values are not echoed back"""
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    logger.warning(f"Validation error: {errors} - {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"message": "Invalid input data", "errors": errors})
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unhandled exception: {exc} - {request.url.path}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"}
    )
