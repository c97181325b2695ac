"""
Error handling utilities
"""

from typing import Optional, Tuple
from task_api.models.response import ErrorResponse
from task_api.utils.logger import logger


class TaskApiError(Exception):
    """Base exception for task API errors"""
    
    status_code = 500
    error_code = "internal_error"
    
    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class NotFoundError(TaskApiError):
    """Requested task does not exist"""
    
    status_code = 404
    error_code = "not_found"
    
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task not found with id: {task_id}", {"id": task_id})


class ValidationError(TaskApiError):
    """Payload fails field constraints"""
    
    status_code = 400
    error_code = "validation_failed"


class InvalidEnumValueError(TaskApiError):
    """Unrecognized enum token, e.g. a status in a path parameter"""
    
    status_code = 400
    error_code = "invalid_enum_value"
    
    def __init__(self, field: str, value: str, allowed: Tuple[str, ...]):
        self.field = field
        self.value = value
        super().__init__(
            f"Invalid {field} '{value}'. Allowed values: {', '.join(allowed)}",
            {"field": field, "value": value, "allowed": list(allowed)},
        )


class StoreTransportError(TaskApiError):
    """Document store could not be reached or failed to answer"""
    
    status_code = 500
    error_code = "store_unavailable"
    
    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)


class DocumentDecodeError(TaskApiError):
    """A stored document could not be turned into a task"""
    
    error_code = "decode_failed"
    
    def __init__(self, document_id: str, reason: str):
        self.document_id = document_id
        super().__init__(f"Cannot decode document {document_id}: {reason}", {"id": document_id})


def handle_error(error: Exception) -> Tuple[int, ErrorResponse]:
    """
    Handle error and return a status code with an error body
    
    Args:
        error: Exception to handle
        
    Returns:
        Tuple of HTTP status code and ErrorResponse
    """
    if isinstance(error, TaskApiError):
        if error.status_code >= 500:
            logger.error(f"Error occurred: {error}", exc_info=error)
        else:
            logger.info(f"Request rejected ({error.status_code}): {error.message}")
        return error.status_code, ErrorResponse(
            message=error.message,
            error_code=error.error_code,
            details=error.details,
        )
    
    logger.error(f"Unexpected error occurred: {error}", exc_info=error)
    
    # Generic error message
    return 500, ErrorResponse(
        message="Internal server error",
        error_code=TaskApiError.error_code,
    )
