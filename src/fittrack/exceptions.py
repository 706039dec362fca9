"""
Custom exceptions for fittrack.

The scoring and progression engines never raise for bad domain input; they
return the state unchanged instead. These exceptions cover the host side:
storage failures and malformed user input reaching the CLI.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent error reporting."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Storage errors
    STORAGE_ERROR = "STORAGE_ERROR"
    DATA_INTEGRITY_ERROR = "DATA_INTEGRITY_ERROR"


class FitTrackError(Exception):
    """
    Base exception for all fittrack errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class ValidationError(FitTrackError):
    """Raised when user input cannot be interpreted."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            details=error_details,
        )


class StorageError(FitTrackError):
    """Raised when persisted state cannot be read or written."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        integrity: bool = False,
    ) -> None:
        error_details = details or {}
        if key:
            error_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCode.DATA_INTEGRITY_ERROR if integrity else ErrorCode.STORAGE_ERROR,
            details=error_details,
        )
