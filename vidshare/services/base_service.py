"""
Base Service
Logging and validation helpers shared by every service
"""

import logging
from typing import Any, Dict, Optional

from vidshare.services.exceptions import (
    DatabaseError,
    ServiceError,
    ValidationError,
)


class BaseService:
    """Common behaviour for services; subclasses name themselves for logging"""

    def __init__(self, config=None):
        self.config = config
        self.logger = logging.getLogger(f"vidshare.services.{self.get_service_name()}")

    def get_service_name(self) -> str:
        return "base"

    # ========================================================================
    # Logging
    # ========================================================================

    def log_debug(self, message: str) -> None:
        self.logger.debug(message)

    def log_info(self, message: str) -> None:
        self.logger.info(message)

    def log_warning(self, message: str) -> None:
        self.logger.warning(message)

    def log_error(self, message: str, error: Optional[Exception] = None) -> None:
        if error is not None:
            self.logger.error(f"{message}: {error}")
        else:
            self.logger.error(message)

    # ========================================================================
    # Validation
    # ========================================================================

    def validate_required(self, value: Any, field_name: str) -> None:
        """Raise ValidationError when value is None or a blank string"""
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{field_name} is required", field=field_name)

    # ========================================================================
    # Error Handling
    # ========================================================================

    def handle_error(
        self,
        error: Exception,
        operation: str,
        context: Optional[Dict[str, Any]] = None,
        error_cls: type = DatabaseError,
    ) -> ServiceError:
        """
        Convert an unexpected exception into a ServiceError

        Service errors pass through unchanged. Usage:
            raise self.handle_error(e, "delete_video", {"video_id": video_id})
        """
        if isinstance(error, ServiceError):
            return error

        self.log_error(f"{operation} failed ({context or {}})", error=error)
        wrapped = error_cls(f"{operation} failed", {**(context or {})})
        wrapped.__cause__ = error
        return wrapped
