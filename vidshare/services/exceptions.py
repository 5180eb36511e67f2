"""
Service Exceptions
Error hierarchy raised by the service layer and mapped to HTTP responses
"""

from typing import Any, Dict, Optional


class ServiceError(Exception):
    """Base class for all service-layer errors"""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Response body for this error"""
        return {"message": self.message}

    def __str__(self) -> str:
        return self.message


# ============================================================================
# Resource Errors
# ============================================================================


class ResourceNotFoundError(ServiceError):
    """Requested record does not exist"""

    status_code = 404

    def __init__(
        self, resource_type: str, resource_id: Any, message: Optional[str] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            message
            or f'No {resource_type.lower()} found with id: "{resource_id}"',
            {"resource_type": resource_type, "resource_id": resource_id},
        )


# ============================================================================
# Validation Errors
# ============================================================================


class ValidationError(ServiceError):
    """Required input missing or malformed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message, {"field": field} if field else None)


# ============================================================================
# Permission Errors
# ============================================================================


class AuthenticationRequiredError(ServiceError):
    """Route needs a caller identity and none was supplied"""

    status_code = 401

    def __init__(self, message: str = "You need to be logged in to visit this route"):
        super().__init__(message)


class PermissionDeniedError(ServiceError):
    """Caller is not the owner/author of the record"""

    status_code = 401


# ============================================================================
# Database Errors
# ============================================================================


class DatabaseError(ServiceError):
    """Store failed while serving the request"""

    status_code = 500


class TransactionError(DatabaseError):
    """Multi-step write failed and was rolled back"""


# ============================================================================
# Utility Functions
# ============================================================================


def error_to_http_status(error: Exception) -> int:
    """
    HTTP status code for an exception

    Args:
        error: Any exception

    Returns:
        The error's status code, 500 for non-service errors
    """
    if isinstance(error, ServiceError):
        return error.status_code
    return 500
