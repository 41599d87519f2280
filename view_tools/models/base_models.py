"""Pydantic models for request/response validation."""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Basic health check response."""

    status: str
    version: str


class RenderRequest(BaseModel):
    """Template snippet to evaluate."""

    template: str | None = Field(..., description="Template source to evaluate")
    context: dict[str, Any] = Field(default_factory=dict, description="Variables available to the template")
    recurse: bool = Field(default=False, description="Evaluate until the output stops changing")


class RenderResponse(BaseModel):
    """Result of a snippet evaluation."""

    output: str | None = Field(..., description="Rendered output, null if evaluation failed")

