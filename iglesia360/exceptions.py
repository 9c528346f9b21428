"""
Domain errors raised by the services and turned into the response envelope
by the handlers registered in ``iglesia360.main``.

    ValidationError     400  missing or malformed input
    AuthenticationError 401  bad mock credentials
    InvalidStateError   403  operation not legal for the current status
    NotFoundError       404  unknown id
    ConflictError       409  duplicate unique value
    UnexpectedError     500  anything else, message never leaked
"""

from typing import Optional

from fastapi import status


class WorkflowError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(WorkflowError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing required fields"


class AuthenticationError(WorkflowError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class InvalidStateError(WorkflowError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Operation not allowed in the current status"


class NotFoundError(WorkflowError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(WorkflowError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class UnexpectedError(WorkflowError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
