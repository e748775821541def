"""
Custom exception classes for the application
"""
from typing import Optional, Dict, Any


class SoftProjectsException(Exception):
    """Base exception for the SOFT Projects backend"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(SoftProjectsException):
    """Resource not found errors"""

    def __init__(self, resource: str, identifier: Optional[str] = None):
        message = f"{resource} not found"
        if identifier:
            message += f": {identifier}"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class ValidationError(SoftProjectsException):
    """Validation errors"""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=422, details=details)


class EligibilityError(ValidationError):
    """Applicant age falls outside the program's eligible range"""

    def __init__(self, program: str, minimum: int, maximum: int, age: Optional[int] = None):
        message = f"{program} applicants must be between {minimum}-{maximum} years old"
        super().__init__(
            message,
            details={"program": program, "min_age": minimum, "max_age": maximum, "age": age},
        )


class ConflictError(SoftProjectsException):
    """Stale write detected through the record version"""

    def __init__(self, message: str = "Record was modified by another user", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=409, details=details)


class StorageError(SoftProjectsException):
    """Persistence back end failures"""

    def __init__(self, message: str = "Storage operation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=503, details=details)


class DuplicateCodeError(StorageError):
    """Applicant code already taken within its program"""

    def __init__(self, program: str, code: str):
        super().__init__(
            f"Applicant code already exists: {code}",
            details={"program": program, "code": code},
        )
        self.status_code = 409
        self.program = program
        self.code = code


class NotificationError(SoftProjectsException):
    """Email delivery errors"""

    def __init__(self, message: str = "Email delivery failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=502, details=details)
