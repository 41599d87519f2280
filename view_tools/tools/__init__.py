"""Tools exposed to templates.

Each tool follows the same lifecycle: configure() once with toolbox
parameters, then init() with a ViewContext for every request.
"""

from view_tools.tools.link_tool import LinkTool, QueryPair
from view_tools.tools.render_tool import RenderTool

__all__ = ["LinkTool", "QueryPair", "RenderTool"]
