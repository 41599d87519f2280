"""Tool for evaluating template snippets from inside templates.

Useful when template source is itself data, e.g. a CMS field containing
"Hello {{ user.name }}". recurse() keeps evaluating the output until it stops
changing, so snippets that produce further template markup are fully
rendered.
"""

from collections.abc import Mapping
from typing import Any

from jinja2 import Environment
from jinja2.runtime import Context

from view_tools.config import DEFAULT_PARSE_DEPTH, RenderToolConfig, parse_tool_params
from view_tools.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

# Used when no environment has been set on the tool
_default_environment = Environment()


class RenderTool:
    """Evaluates template text against a context, optionally until it stabilizes."""

    def __init__(
        self,
        environment: Environment | None = None,
        parse_depth: int = DEFAULT_PARSE_DEPTH,
        catch_exceptions: bool = True,
    ):
        self.environment = environment
        self.parse_depth = parse_depth
        self.catch_exceptions = catch_exceptions

    def configure(self, params: Mapping[str, Any] | None) -> None:
        """Apply toolbox parameters "parse.depth" and "catch.exceptions".

        Raises:
            ConfigurationException: If a value is invalid
        """
        config = parse_tool_params(RenderToolConfig, params)
        self.parse_depth = config.parse_depth
        self.catch_exceptions = config.catch_exceptions

    def eval(self, context: Mapping[str, Any] | Context | None, text: str | None) -> str | None:
        """Evaluate `text` once against `context`.

        Args:
            context: Variables available to the snippet
            text: Template source; None yields None without evaluating anything

        Returns:
            Rendered output, or None if evaluation failed and exceptions are caught

        Raises:
            Exception: Whatever the template engine raised, when catch_exceptions is off
        """
        if not self.catch_exceptions:
            return self._evaluate(context, text)
        try:
            return self._evaluate(context, text)
        except Exception as e:
            log_with_context(
                logger,
                "debug",
                "Template evaluation failed",
                error=str(e),
                error_type=type(e).__name__,
                event_type="render_eval_error",
            )
            return None

    def recurse(self, context: Mapping[str, Any] | Context | None, text: str | None) -> str | None:
        """Evaluate `text` repeatedly until the output stops changing.

        Stops when an evaluation returns None or its own input. Runs at most
        parse_depth passes (always at least one); if the output is still
        changing by then, the last output is returned as it is.
        """
        passes = 0
        while True:
            result = self.eval(context, text)
            passes += 1
            if result is None or result == text:
                return result
            if passes >= self.parse_depth:
                log_with_context(
                    logger,
                    "debug",
                    "Template recursion stopped at parse depth",
                    parse_depth=self.parse_depth,
                    event_type="render_depth_reached",
                )
                return result
            text = result

    def _evaluate(self, context: Mapping[str, Any] | Context | None, text: str | None) -> str | None:
        if text is None:
            return None
        environment = self.environment or _default_environment
        if isinstance(context, Context):
            variables = context.get_all()
        else:
            variables = dict(context or {})
        return environment.from_string(text).render(variables)
