"""
Custom exceptions for DBE Tracker

Every error raised by the service layer derives from DBETrackerError so the
API can turn it into a uniform JSON body:

    {"code": "...", "message": "...", "details": {...}}

Usage:
    from ..core.exceptions import NotFoundError

    if not contract:
        raise NotFoundError("Contract", contract_id)
"""
from typing import Optional, Any, Dict
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


class DBETrackerError(Exception):
    """Base exception for all DBE Tracker errors"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: str = "internal_error",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(DBETrackerError):
    """Input rejected before anything was written"""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, message: str, field: Optional[str] = None, code: str = "validation_error"):
        details = {"field": field} if field else {}
        super().__init__(message, code=code, details=details)


class NotFoundError(DBETrackerError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(
            f"{resource} not found",
            code="not_found",
            details={"resource": resource, "id": str(resource_id)}
        )


class PermissionDeniedError(DBETrackerError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "You do not have permission to modify this record"):
        super().__init__(message, code="permission_denied")


class AuthenticationError(DBETrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(
        self,
        message: str = "Not authenticated",
        code: str = "not_authenticated",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code=code, details=details)


class DataStoreError(DBETrackerError):
    """Database failure after a write or read was attempted"""

    def __init__(self, message: str, conflict: bool = False):
        super().__init__(message, code="conflict" if conflict else "data_store_error")
        if conflict:
            self.status_code = status.HTTP_409_CONFLICT


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers that turn errors into the JSON error body"""

    @app.exception_handler(DBETrackerError)
    async def dbe_tracker_error_handler(request: Request, exc: DBETrackerError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return JSONResponse(content=exc.to_dict(), status_code=exc.status_code, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            content={
                "code": "validation_error",
                "message": "Request validation failed",
                "details": {"errors": jsonable_encoder(exc.errors())},
            },
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )
