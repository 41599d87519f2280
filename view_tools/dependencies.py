"""FastAPI dependencies for dependency injection."""

from fastapi import Request
from fastapi.templating import Jinja2Templates

from view_tools.toolbox import Toolbox
from view_tools.tools import RenderTool


async def get_toolbox(request: Request) -> Toolbox:
    """
    Get the shared toolbox from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The Toolbox installed on the application.

    Raises:
        RuntimeError: If the toolbox is not initialized.
    """
    toolbox: Toolbox | None = getattr(request.app.state, "toolbox", None)

    if toolbox is None:
        raise RuntimeError("Toolbox not initialized. This should never happen.")

    return toolbox


async def get_templates(request: Request) -> Jinja2Templates:
    """
    Get the Jinja2 templates the toolbox is installed on.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared Jinja2Templates instance.

    Raises:
        RuntimeError: If templates are not initialized.
    """
    templates: Jinja2Templates | None = getattr(request.app.state, "templates", None)

    if templates is None:
        raise RuntimeError("Templates not initialized.")

    return templates


async def get_api_render_tool(request: Request) -> RenderTool:
    """
    Get the sandboxed render tool used for client-supplied templates.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared sandboxed RenderTool.

    Raises:
        RuntimeError: If the render tool is not initialized.
    """
    tool: RenderTool | None = getattr(request.app.state, "api_render_tool", None)

    if tool is None:
        raise RuntimeError("API render tool not initialized.")

    return tool
