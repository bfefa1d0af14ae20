"""Error handling for MCP Neovim Server."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for MCP Neovim Server."""

    # Protocol level errors
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_FIELD = "INVALID_FIELD"

    # Editor errors
    CONNECTION_FAILED = "CONNECTION_FAILED"
    EDITOR_ERROR = "EDITOR_ERROR"

    # Policy rejections

    # Internal errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass
class SessionError(Exception):
    """Base exception class for MCP Neovim Server."""

    code: ErrorCode
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary format for JSON response."""
        error_dict = {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }
        if self.details:
            error_dict["error"]["details"] = self.details
        return error_dict


class ValidationError(SessionError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.INVALID_FIELD,
    ):
        super().__init__(code=code, message=message, details=details)


class EditorConnectionError(SessionError):
    """Raised when the Neovim socket cannot be attached."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            code=ErrorCode.CONNECTION_FAILED, message=message, details=details
        )


class EditorCommandError(SessionError):
    """Raised when Neovim reports an error through v:errmsg."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(code=ErrorCode.EDITOR_ERROR, message=message, details=details)


class InternalError(SessionError):
    """Raised when internal errors occur."""

    def __init__(
        self,
        message: str = "An internal error occurred",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            code=ErrorCode.INTERNAL_ERROR,
            message=message,
            details=details,
        )
