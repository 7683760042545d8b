"""
Exception classes and handlers.

Routes raise the typed errors below; the handlers registered in
collegeez.main turn them into JSON responses. Every route shares the
same mapping from error kind to HTTP status.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class CollegeEZException(Exception):
    """
    Base exception for the CollegeEZNow API.

    Carries everything needed to build the error response.
    """

    def __init__(
        self,
        message: str,
        code: str = "COLLEGEEZ_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


# ============================================================
# COLLEGE ERRORS
# ============================================================

class CollegeNotFoundError(CollegeEZException):
    """Raised when no college has the requested id."""

    def __init__(self, college_id: str):
        super().__init__(
            message="College not found",
            code="COLLEGE_NOT_FOUND",
            status_code=404,
            details={"collegeId": college_id}
        )


class InvalidCollegeIdError(CollegeEZException):
    """
    Raised when a college id is not a valid ObjectId.

    Reported as a server fault (500), the same as any other failed lookup.
    """

    def __init__(self, college_id: str):
        super().__init__(
            message="Failed to fetch college",
            code="INVALID_COLLEGE_ID",
            status_code=500,
            details={"collegeId": college_id}
        )


# ============================================================
# STUDENT ERRORS
# ============================================================

class StudentNotFoundError(CollegeEZException):
    """Raised when no student has the requested email."""

    def __init__(self, email: str):
        super().__init__(
            message="Student not found",
            code="STUDENT_NOT_FOUND",
            status_code=404,
            details={"email": email}
        )


class StudentAlreadyExistsError(CollegeEZException):
    """Raised when registering an email that is already taken."""

    def __init__(self, email: str):
        super().__init__(
            message="User already exists",
            code="STUDENT_EXISTS",
            status_code=409,
            details={"email": email}
        )


# ============================================================
# HANDLERS
# ============================================================

async def collegeez_exception_handler(request: Request, exc: CollegeEZException) -> JSONResponse:
    """Render a CollegeEZException as JSON."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.details}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def database_exception_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    """
    Any MongoDB failure becomes a generic 500.

    The driver error is logged server-side only.
    """
    logger.exception(f"{request.method} {request.url.path} database error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "code": "DATABASE_ERROR"}
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for anything the other handlers do not cover."""
    logger.exception(f"{request.method} {request.url.path} unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "code": "INTERNAL_ERROR"}
    )
