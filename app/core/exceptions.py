from typing import Any, Dict, List, Optional
from fastapi import status

class BaseAppException(Exception):
    """Base exception for application"""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_SERVER_ERROR",
        details: Optional[List[str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Return error response as dictionary with error code"""
        error = {
            "code": self.error_code,
            "message": self.message,
        }
        if self.details:
            error["details"] = self.details
        return {"error": error}

class BadRequestException(BaseAppException):
    """Raised when request input is malformed"""
    def __init__(self, message: str = "Bad request"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, "BAD_REQUEST")

class ValidationException(BaseAppException):
    """Raised when data violates field constraints"""
    def __init__(self, message: str = "Invalid data", details: Optional[List[str]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", details)

class UnauthorizedException(BaseAppException):
    """Raised when the caller cannot be authenticated"""
    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED")

class ForbiddenException(BaseAppException):
    """Raised when the caller lacks a required permission"""
    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, status.HTTP_403_FORBIDDEN, "FORBIDDEN")

class NotFoundException(BaseAppException):
    """Raised when a resource is not found"""
    def __init__(self, message: str = "Not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND, "NOT_FOUND")

class MovieNotFoundException(NotFoundException):
    """Raised when movie is not found"""
    def __init__(self, message: str = "Movie not found"):
        super().__init__(message)

class MovieAlreadyExistsException(BaseAppException):
    """Raised when movie already exists"""
    def __init__(self, message: str = "Movie already exists in database"):
        super().__init__(message, status.HTTP_409_CONFLICT, "CONFLICT")

class ServiceUnavailableException(BaseAppException):
    """Raised when an upstream service cannot be reached"""
    def __init__(self, message: str = "Service unavailable"):
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE, "SERVICE_UNAVAILABLE")

class ConfigurationException(BaseAppException):
    """Raised when required configuration is missing"""
    def __init__(self, message: str = "Server configuration error"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR")
