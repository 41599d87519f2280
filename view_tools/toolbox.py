"""Toolbox wiring the view tools into Jinja2 templates.

Usage:
    templates = Jinja2Templates(directory="templates")
    Toolbox(get_settings()).install(templates)

Every template rendered through `templates` then sees `link` and `render`
variables, plus `eval` and `recurse` filters.
"""

from collections.abc import Callable
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from jinja2 import Environment, pass_context
from jinja2.runtime import Context
from markupsafe import Markup

from view_tools.config import Settings, get_settings
from view_tools.context import ViewContext
from view_tools.logging_config import get_logger, log_with_context
from view_tools.tools import LinkTool, RenderTool

logger = get_logger(__name__)

LINK_TOOL_KEY = "link"
RENDER_TOOL_KEY = "render"


class Toolbox:
    """Holds configured tools and hands them out per request.

    The link tool is configured once as a prototype and initialized on a
    fresh copy for each request. The render tool keeps no request state and
    is shared.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        environment: Environment | None = None,
        url_rewriter: Callable[[str], str] | None = None,
    ):
        """Initialize toolbox.

        Args:
            settings: Settings to configure the tools from (defaults to get_settings())
            environment: Jinja2 environment used by the render tool
            url_rewriter: Hook applied to every rendered link
        """
        self.settings = settings or get_settings()
        self.url_rewriter = url_rewriter

        self._link_prototype = LinkTool()
        self._link_prototype.configure(self.settings.link_tool_params())

        self.render_tool = RenderTool(environment=environment)
        self.render_tool.configure(self.settings.render_tool_params())

    def link_for(self, request: Request) -> LinkTool:
        """Return a link tool bound to `request`."""
        link = self._link_prototype.duplicate()
        link.init(ViewContext.from_request(request, self.settings, self.url_rewriter))
        return link

    def tools_for(self, request: Request) -> dict[str, Any]:
        """Return the template variables for `request`."""
        return {
            LINK_TOOL_KEY: self.link_for(request),
            RENDER_TOOL_KEY: self.render_tool,
        }

    def context_processor(self, request: Request) -> dict[str, Any]:
        """Jinja2Templates context processor exposing the tools."""
        return self.tools_for(request)

    def install(self, templates: Jinja2Templates) -> Jinja2Templates:
        """Register the tools and filters on a Jinja2Templates instance.

        The render tool evaluates snippets with the templates' own
        environment unless it was given one explicitly.
        """
        if self.render_tool.environment is None:
            self.render_tool.environment = templates.env

        templates.context_processors.append(self.context_processor)
        templates.env.filters["eval"] = self._filter(self.render_tool.eval)
        templates.env.filters["recurse"] = self._filter(self.render_tool.recurse)

        log_with_context(
            logger,
            "info",
            "View tools installed",
            xhtml=self.settings.xhtml,
            parse_depth=self.render_tool.parse_depth,
            catch_exceptions=self.render_tool.catch_exceptions,
            event_type="toolbox_installed",
        )
        return templates

    def _filter(self, evaluate: Callable[[Context, str | None], str | None]):
        render_tool = self.render_tool

        @pass_context
        def _apply(context: Context, text: str | None) -> str:
            result = evaluate(context, text)
            if result is None:
                return ""
            # Output of an autoescaping environment is already escaped
            if context.environment is render_tool.environment and context.eval_ctx.autoescape:
                return Markup(result)
            return result

        return _apply
