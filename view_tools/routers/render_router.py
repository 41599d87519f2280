"""Snippet rendering API."""

from fastapi import APIRouter, Depends

from view_tools.dependencies import get_api_render_tool
from view_tools.exceptions import TemplateEvaluationException
from view_tools.logging_config import get_logger, log_with_context
from view_tools.models import RenderRequest, RenderResponse
from view_tools.tools import RenderTool

logger = get_logger(__name__)

router = APIRouter()


@router.post("", response_model=RenderResponse)
def render_snippet(payload: RenderRequest, tool: RenderTool = Depends(get_api_render_tool)):
    """Evaluate a template snippet against the given context.

    **Returns:**
    - 200: Rendered output (null if evaluation failed and errors are caught)
    - 422: Evaluation failed and errors are not caught
    """
    evaluate = tool.recurse if payload.recurse else tool.eval
    try:
        output = evaluate(payload.context, payload.template)
    except Exception as e:
        log_with_context(
            logger,
            "warning",
            "Snippet evaluation failed",
            error=str(e),
            error_type=type(e).__name__,
            recurse=payload.recurse,
            event_type="render_api_error",
        )
        raise TemplateEvaluationException(
            "Template evaluation failed",
            details={"error": str(e), "error_type": type(e).__name__},
        ) from e
    return RenderResponse(output=output)
