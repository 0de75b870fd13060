from typing import Any, Dict, List, Optional

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

class AuthenticationError(AppException):
    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTH_FAILED"
        )

class AccessDeniedError(AppException):
    """
    Policy denial. Carries the name of the violated rule so the boundary
    layer can report it. Named AccessDeniedError to avoid shadowing Python's
    built-in PermissionError.
    """
    def __init__(self, message: str = "Insufficient permissions", rule: Optional[str] = None):
        self.rule = rule
        super().__init__(
            message=message,
            status_code=403,
            error_code="PERMISSION_DENIED",
            details={"rule": rule} if rule else None
        )

class NotFoundError(AppException):
    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found" if resource_id is None else f"{resource} {resource_id} not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND"
        )

class ValidationFailedError(AppException):
    def __init__(self, message: str = "Validation failed", fields: Optional[List[Dict[str, str]]] = None):
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_FAILED",
            details={"fields": fields or []}
        )

class ConflictError(AppException):
    def __init__(self, message: str = "Resource already exists"):
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT"
        )
