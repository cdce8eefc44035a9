"""
Pydantic models for Praxis API requests and responses.
This module defines the request and response schemas used by the Praxis API.
"""

from typing import (
    List,
    Optional,
)

from pydantic import (
    BaseModel,
    Field,
)

from praxis.core.schema import (
    Message,
    Workflow,
)


# ---------------------------------------------------------------------------
# Pydantic request / response schema
# ---------------------------------------------------------------------------
class TaskRequest(BaseModel):
    """Run one task with an agent assembled from registered tools."""

    role: str = Field(..., description="Role the agent plays, e.g. 'a research assistant'")
    description: str = Field("", description="Further description of the agent")
    model: Optional[str] = Field(None, description="Model identifier (defaults to settings)")
    tools: List[str] = Field(default_factory=list, description="Registered tool names")
    workflow: Workflow
    messages: List[Message] = Field(
        default_factory=list, description="Prior conversation to continue from"
    )
    max_turns: Optional[int] = Field(None, ge=1, description="Turn ceiling for this task")


class TaskResponse(BaseModel):
    """API response returned to the caller."""

    result: str
    turns: int
    messages: List[Message]


class ToolInfo(BaseModel):
    """A registered tool."""

    name: str
    description: str
