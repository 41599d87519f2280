"""Template rendering utilities for HTML views."""

from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from view_tools.toolbox import Toolbox

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

# Template text that itself renders to more template text
GREETING_SNIPPET = "{{ salutation }}"
SALUTATION = "Hello {{ name }}!"
SITE_NAME = "View Tools"


def create_templates(toolbox: Toolbox, directory: Path = TEMPLATES_DIR) -> Jinja2Templates:
    """Create Jinja2 templates with the view tools installed.

    Args:
        toolbox: Toolbox providing the link and render tools
        directory: Template directory

    Returns:
        Jinja2Templates instance
    """
    templates = Jinja2Templates(directory=directory)
    return toolbox.install(templates)


class TemplateRenderer:
    """Handles rendering of Jinja2 templates for the demo views."""

    @staticmethod
    def render_index(request: Request, templates: Jinja2Templates) -> HTMLResponse:
        """Render the index page.

        Args:
            request: FastAPI request object
            templates: Templates with the view tools installed

        Returns:
            HTMLResponse with rendered index page
        """
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "name": SITE_NAME,
                "query": request.query_params.get("q", ""),
                "greeting": GREETING_SNIPPET,
                "salutation": SALUTATION,
            },
        )
