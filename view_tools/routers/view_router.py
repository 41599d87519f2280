"""Page/view routes for serving HTML pages and links."""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

from view_tools.dependencies import get_templates, get_toolbox
from view_tools.toolbox import Toolbox
from view_tools.views.template_renderer import TemplateRenderer

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, templates: Jinja2Templates = Depends(get_templates)):
    """Render index page."""
    return TemplateRenderer.render_index(request, templates)


@router.get("/links/self", response_class=PlainTextResponse)
async def self_link(request: Request, toolbox: Toolbox = Depends(get_toolbox)):
    """Return the link to the current request, as configured for self links."""
    return str(toolbox.link_for(request).get_self())


@router.get("/links/all-parameters", response_class=PlainTextResponse)
async def all_parameters_link(
    request: Request,
    ignore: list[str] | None = Query(default=None),
    toolbox: Toolbox = Depends(get_toolbox),
):
    """Return a relative link to this path carrying every request parameter.

    Parameters named by `ignore` (and `ignore` itself) are left out.
    """
    link = toolbox.link_for(request).add_ignore("ignore")
    for name in ignore or []:
        link = link.add_ignore(name)
    return str(link.relative(link.get_request_path()).add_all_parameters())
