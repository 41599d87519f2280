"""Custom exceptions for the view tools with HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    VIEW_TOOLS_ERROR = "VIEW_TOOLS_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Tool lifecycle errors
    TOOL_INIT_ERROR = "TOOL_INIT_ERROR"

    # Template evaluation errors
    TEMPLATE_EVAL_ERROR = "TEMPLATE_EVAL_ERROR"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_INVALID = "CONFIG_INVALID"


class ViewToolsException(Exception):
    """Base exception for view tool errors with HTTP status code support.

    All custom exceptions should inherit from this class to ensure
    consistent error handling across the application.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VIEW_TOOLS_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize view tools exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ToolInitializationException(ViewToolsException, TypeError):
    """A tool was initialized with something other than a view context."""

    def __init__(
        self,
        message: str = "Tool can only be initialized with a ViewContext",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            code=ErrorCode.TOOL_INIT_ERROR,
            status_code=500,
            details=details,
        )


class ConfigurationException(ViewToolsException):
    """Configuration errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class TemplateEvaluationException(ViewToolsException):
    """Template snippet evaluation failed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.TEMPLATE_EVAL_ERROR,
            status_code=422,
            details=details,
        )
