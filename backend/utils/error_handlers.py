"""
Error handling decorators and utilities for API endpoints.

Maps application exceptions to HTTP responses in one place instead of
repeating try/except blocks in every route.
"""

from functools import wraps
from typing import Callable
import logging

from fastapi import HTTPException

from constants import HTTPStatus
from exceptions import (
    ApplicationError,
    ConfigurationError,
    DownloadError,
    FragmentationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def to_http_exception(operation_name: str, error: Exception) -> HTTPException:
    """
    Convert an exception raised by a service or repository to an HTTPException.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Job lookup")
        error: The raised exception

    Returns:
        HTTPException with a status code matching the error kind
    """
    if isinstance(error, NotFoundError):
        logger.info(f"{operation_name} - Not found: {error.message}")
        return HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=error.message)
    if isinstance(error, ValidationError):
        logger.warning(f"{operation_name} - Validation error: {error.message}")
        return HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=error.message)
    if isinstance(error, ConfigurationError):
        logger.warning(f"{operation_name} - Configuration error: {error.message}")
        return HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=error.message)
    if isinstance(error, PersistenceError):
        logger.error(f"{operation_name} - Database error: {error.message}", exc_info=error)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"Database operation failed: {error.message}"
        )
    if isinstance(error, DownloadError):
        logger.error(f"{operation_name} - Download error: {error.message}", exc_info=error)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"Download failed: {error.message}"
        )
    if isinstance(error, FragmentationError):
        logger.error(f"{operation_name} - Fragmentation error: {error.message}", exc_info=error)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"Fragmentation failed: {error.message}"
        )
    if isinstance(error, ApplicationError):
        logger.error(f"{operation_name} - Application error: {error.message}", exc_info=error)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"{operation_name} failed: {error.message}"
        )

    logger.error(f"{operation_name} - Unexpected error: {error}", exc_info=error)
    return HTTPException(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        detail=f"{operation_name} failed. Please check server logs or contact support."
    )


def handle_api_errors(operation_name: str):
    """
    Decorator to handle common API errors consistently across endpoints.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Job lookup")

    Returns:
        Decorated function that handles errors uniformly

    Example:
        @router.get("/jobs/{job_id}")
        @handle_api_errors("Job lookup")
        def get_job(job_id: str, ...):
            return service.get_job(job_id)
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HTTPException:
                # Re-raise HTTPException as-is to preserve status code and detail
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        return wrapper

    return decorator
