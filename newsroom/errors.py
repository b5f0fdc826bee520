"""
Workflow error kinds.

Raised by the lifecycle engine, schedule manager and store; mapped to HTTP
responses by ``responses.workflow_exception_handler``.
"""
from typing import Any, Dict, Optional


class WorkflowError(Exception):
    """Base class for errors surfaced to the HTTP layer."""

    status_code = 400
    error_code = "WORKFLOW_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFound(WorkflowError):
    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource: str = "Article", id: Any = None):
        message = f"{resource} not found" if id is None else f"{resource} '{id}' not found"
        super().__init__(message, {"id": id} if id is not None else None)


class NotAllowed(WorkflowError):
    status_code = 403
    error_code = "NOT_ALLOWED"


class InvalidState(WorkflowError):
    status_code = 409
    error_code = "INVALID_STATE"


class ValidationFailed(WorkflowError):
    status_code = 422
    error_code = "VALIDATION_FAILED"


class ConcurrentUpdate(WorkflowError):
    """The row changed between read and write."""

    status_code = 409
    error_code = "CONCURRENT_UPDATE"
