"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI
from jinja2.sandbox import SandboxedEnvironment

from view_tools import __version__
from view_tools.config import Settings, get_settings
from view_tools.logging_config import get_logger, log_with_context
from view_tools.middleware.error_handlers import register_error_handlers
from view_tools.routers import health_router, render_router, view_router
from view_tools.toolbox import Toolbox
from view_tools.tools import RenderTool
from view_tools.views.template_renderer import create_templates

logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to get_settings())

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="View Tools Demo",
        description="""
        Demo pages rendered with the **link** and **render** template tools.

        - `/` - Index page using links, self links and recursive rendering
        - `/links/self` - Self link of the current request
        - `/links/all-parameters` - Link carrying every request parameter
        - `/api/render` - Evaluate a template snippet (sandboxed)
        """,
        version=__version__,
        license_info={
            "name": "MIT",
        },
    )

    # Register exception handlers
    register_error_handlers(app)

    # Tools are shared by every request; link tools are re-initialized per request
    toolbox = Toolbox(settings)
    app.state.settings = settings
    app.state.toolbox = toolbox
    app.state.templates = create_templates(toolbox)

    # Client-supplied templates are only ever evaluated in a sandbox
    api_render_tool = RenderTool(environment=SandboxedEnvironment())
    api_render_tool.configure(settings.render_tool_params())
    app.state.api_render_tool = api_render_tool

    # View routes (HTML pages and links) - no prefix
    app.include_router(view_router.router, tags=["views"])

    # Health endpoint
    app.include_router(health_router.router, tags=["health"])

    # API routes
    app.include_router(render_router.router, prefix="/api/render", tags=["render"])

    log_with_context(
        logger,
        "info",
        "Application created",
        version=__version__,
        event_type="app_created",
    )
    return app
