"""Tests for custom exception classes."""

from view_tools.exceptions import (
    ConfigurationException,
    ErrorCode,
    TemplateEvaluationException,
    ToolInitializationException,
    ViewToolsException,
)


class TestErrorCodes:
    """Tests for ErrorCode enum."""

    def test_error_code_values(self):
        """Test that error codes have correct values."""
        assert ErrorCode.VIEW_TOOLS_ERROR == "VIEW_TOOLS_ERROR"
        assert ErrorCode.TOOL_INIT_ERROR == "TOOL_INIT_ERROR"
        assert ErrorCode.TEMPLATE_EVAL_ERROR == "TEMPLATE_EVAL_ERROR"
        assert ErrorCode.CONFIG_INVALID == "CONFIG_INVALID"


class TestViewToolsException:
    """Tests for ViewToolsException."""

    def test_basic(self):
        """Test creating basic exception."""
        exc = ViewToolsException(message="Test error")

        assert exc.message == "Test error"
        assert exc.code == ErrorCode.VIEW_TOOLS_ERROR
        assert exc.status_code == 500
        assert exc.details == {}
        assert str(exc) == "Test error"

    def test_with_details(self):
        """Test exception with details."""
        exc = ViewToolsException(
            message="Test error", code=ErrorCode.INTERNAL_ERROR, status_code=503, details={"key": "value"}
        )

        assert exc.code == ErrorCode.INTERNAL_ERROR
        assert exc.status_code == 503
        assert exc.details["key"] == "value"


class TestSubclasses:
    """Tests for the specific exceptions."""

    def test_tool_initialization_defaults(self):
        """Test tool init error is also a TypeError."""
        exc = ToolInitializationException()

        assert isinstance(exc, ViewToolsException)
        assert isinstance(exc, TypeError)
        assert exc.code == ErrorCode.TOOL_INIT_ERROR
        assert "ViewContext" in exc.message

    def test_configuration_exception(self):
        """Test configuration error defaults."""
        exc = ConfigurationException("bad config")

        assert exc.code == ErrorCode.CONFIG_ERROR
        assert exc.status_code == 500

    def test_template_evaluation_exception(self):
        """Test evaluation error carries details."""
        exc = TemplateEvaluationException("failed", details={"error_type": "TemplateSyntaxError"})

        assert exc.code == ErrorCode.TEMPLATE_EVAL_ERROR
        assert exc.status_code == 422
        assert exc.details["error_type"] == "TemplateSyntaxError"
