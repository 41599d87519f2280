"""View tools API models"""

from view_tools.models.base_models import HealthResponse, RenderRequest, RenderResponse

__all__ = [
    "HealthResponse",
    "RenderRequest",
    "RenderResponse",
]
