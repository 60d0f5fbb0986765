from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that carry their own HTTP status"""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body = {"status": "error", "code": self.status_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


# Authentication

class AuthError(AppError):
    status_code = 401


class InvalidCredentialsError(AuthError):
    def __init__(self):
        super().__init__("Invalid email or password")


class AdminExistsError(AuthError):
    def __init__(self, email: str):
        super().__init__(f"Admin with email {email} already exists", status_code=400)


class AdminNotFoundError(AuthError):
    def __init__(self, admin_id):
        super().__init__(f"Admin with ID {admin_id} not found", status_code=404)


class InvalidTokenError(AuthError):
    def __init__(self):
        super().__init__("Invalid or expired token")


class PasswordMismatchError(AuthError):
    def __init__(self):
        super().__init__("Current password is incorrect", status_code=400)


# Validation and resources

class ValidationError(AppError):
    status_code = 400


class InvalidDateRangeError(ValidationError):
    def __init__(self):
        super().__init__(
            "End date must be after start date",
            details={"start": "Start date", "end": "End date"},
        )


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")


class DuplicateAttendanceError(AppError):
    status_code = 409

    def __init__(self, contact_id: int, day):
        super().__init__(
            "Attendance already marked for this contact on this date",
            details={"contact_id": contact_id, "date": day.date().isoformat()},
        )


# Analytics

class AggregationFailure(AppError):
    """A store query failed while building the dashboard report"""

    status_code = 500

    def __init__(self, message: str = "Analytics unavailable"):
        super().__init__(message)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc.__cause__ or exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
