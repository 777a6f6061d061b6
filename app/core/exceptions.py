from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class ValidationError(AppException):
    """Input does not match the entity schema. `field` is the wire name of the offending field."""
    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"{field}: {message}",
            status_code=422,
            error_code="VALIDATION_ERROR",
            details={"field": field}
        )
        self.field = field

class PermissionDenied(AppException):
    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(
            message=message,
            status_code=403,
            error_code="PERMISSION_DENIED"
        )

class NotFoundError(AppException):
    def __init__(self, entity: str, record_id: str):
        super().__init__(
            message=f"{entity} {record_id} not found",
            status_code=404,
            error_code="NOT_FOUND",
            details={"entity": entity, "id": record_id}
        )

class ConflictError(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details
        )

class ConnectivityError(AppException):
    def __init__(self, message: str = "The record store is unreachable. Please try again."):
        super().__init__(
            message=message,
            status_code=503,
            error_code="CONNECTIVITY_ERROR"
        )
