import codecs
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from view_tools.exceptions import ConfigurationException, ErrorCode
from view_tools.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent  # view-tools/

DEFAULT_PARSE_DEPTH = 20

# Toolbox parameter names
SELF_ABSOLUTE_KEY = "self-absolute"
SELF_INCLUDE_PARAMETERS_KEY = "self-include-parameters"
AUTO_IGNORE_PARAMETERS_KEY = "auto-ignore-parameters"
PARSE_DEPTH_KEY = "parse.depth"
CATCH_EXCEPTIONS_KEY = "catch.exceptions"


class Settings(BaseSettings):
    """Application settings with validation.

    Every field has a default, values can be overridden through
    VIEW_TOOLS_* environment variables or a .env file.
    """

    # Demo server settings
    app_host: str = Field(default="127.0.0.1", min_length=1, description="Server host")
    app_port: int = Field(ge=1, le=65535, default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Root log level")

    # Output settings shared by every tool
    xhtml: bool = Field(default=False, description="Use '&amp;' as query delimiter")
    output_encoding: str = Field(default="utf-8", min_length=1, description="Charset for URL encoding")

    # Link tool
    self_absolute: bool = Field(default=False, description="Self links use the absolute URL")
    self_include_parameters: bool = Field(default=False, description="Self links keep request parameters")
    auto_ignore_parameters: bool = Field(default=True, description="Added parameters are ignored by add_all_parameters")

    # Render tool
    parse_depth: int = Field(default=DEFAULT_PARSE_DEPTH, ge=0, description="Max recursion depth for recurse()")
    catch_exceptions: bool = Field(default=True, description="Swallow template evaluation errors")

    model_config = SettingsConfigDict(
        env_prefix="VIEW_TOOLS_",
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a standard logging level."""
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return v

    @field_validator("output_encoding", mode="after")
    @classmethod
    def validate_output_encoding(cls, v: str) -> str:
        """Ensure output_encoding names a codec Python knows."""
        v = v.strip()
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"output_encoding is not a known codec: {v}") from e
        return v

    def link_tool_params(self) -> dict[str, Any]:
        """Toolbox parameters for the link tool."""
        return {
            SELF_ABSOLUTE_KEY: self.self_absolute,
            SELF_INCLUDE_PARAMETERS_KEY: self.self_include_parameters,
            AUTO_IGNORE_PARAMETERS_KEY: self.auto_ignore_parameters,
        }

    def render_tool_params(self) -> dict[str, Any]:
        """Toolbox parameters for the render tool."""
        return {
            PARSE_DEPTH_KEY: self.parse_depth,
            CATCH_EXCEPTIONS_KEY: self.catch_exceptions,
        }


class LinkToolConfig(BaseModel):
    """Link tool parameters. Unset fields leave the tool's current value alone."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    self_absolute: bool | None = Field(default=None, alias=SELF_ABSOLUTE_KEY)
    self_include_parameters: bool | None = Field(default=None, alias=SELF_INCLUDE_PARAMETERS_KEY)
    auto_ignore_parameters: bool | None = Field(default=None, alias=AUTO_IGNORE_PARAMETERS_KEY)


class RenderToolConfig(BaseModel):
    """Render tool parameters."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    parse_depth: int = Field(default=DEFAULT_PARSE_DEPTH, ge=0, alias=PARSE_DEPTH_KEY)
    catch_exceptions: bool = Field(default=True, alias=CATCH_EXCEPTIONS_KEY)


ToolConfigT = TypeVar("ToolConfigT", bound=BaseModel)


def parse_tool_params(model: type[ToolConfigT], params: Mapping[str, Any] | None) -> ToolConfigT:
    """Validate a toolbox parameter mapping against a tool config model.

    Args:
        model: Config model class (LinkToolConfig or RenderToolConfig)
        params: Raw parameters, values may be strings as read from a toolbox file

    Returns:
        Validated config model

    Raises:
        ConfigurationException: If a parameter has an invalid value
    """
    try:
        return model.model_validate(dict(params or {}))
    except ValidationError as e:
        errors = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()]
        log_with_context(
            logger,
            "error",
            "Invalid tool parameters",
            tool_config=model.__name__,
            errors=errors,
            event_type="config_tool_params_invalid",
        )
        raise ConfigurationException(
            f"Invalid {model.__name__} parameters",
            code=ErrorCode.CONFIG_INVALID,
            details={"errors": errors},
        ) from e


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    Returns:
        Cached Settings instance

    Example:
        @app.get("/")
        async def route(settings: Settings = Depends(get_settings)):
            return {"xhtml": settings.xhtml}
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
