"""
Tool registry for Praxis.

This module provides a decorator to register tools and a registry to look them up by name.  Agents
built from the CLI or the HTTP API pick their tools out of this registry; library callers are free
to hand-build :class:`~praxis.core.schema.Tool` mappings instead.
"""

import logging
from datetime import (
    datetime,
    timezone,
)
from typing import (
    Callable,
    Dict,
    Iterable,
    Type,
)

from pydantic import (
    BaseModel,
    Field,
)

from praxis.agent.errors import UnknownToolError
from praxis.core.schema import Tool

logger = logging.getLogger(__name__)

TOOL_REGISTRY: Dict[str, Tool] = {}
"""Global registry of tools."""


def register_tool(
    name: str, parameters: Type[BaseModel], description: str | None = None
) -> Callable:
    """
    Register a tool function with the given name.

    The function receives a validated instance of *parameters* and may be a plain function or a
    coroutine function:

        class AddParams(BaseModel):
            a: int
            b: int

        @register_tool("add", AddParams)
        def add(params: AddParams) -> int:
            \"\"\"Add two integers.\"\"\"
            return params.a + params.b

    Parameters
    ----------
    name: str
        The name of the tool.  This must be unique and is the name the model calls it by.
    parameters: Type[BaseModel]
        Pydantic model describing (and validating) the tool arguments.
    description: str | None
        Human-readable description.  Defaults to the function docstring.

    Raises
    ------
    ValueError
        If a tool with the same name is already registered.
    """
    if name in TOOL_REGISTRY:
        raise ValueError(f"Tool '{name}' is already registered.")
    logger.debug("Registering tool '%s'", name)

    def wrapper(fn: Callable) -> Callable:
        TOOL_REGISTRY[name] = Tool(
            parameters=parameters,
            description=description or (fn.__doc__ or "").strip(),
            execute=fn,
        )
        return fn

    return wrapper


def get_tools(names: Iterable[str]) -> Dict[str, Tool]:
    """Return an agent tool mapping for the registered tools called *names*."""
    tools: Dict[str, Tool] = {}
    for name in names:
        tool = TOOL_REGISTRY.get(name)
        if tool is None:
            raise UnknownToolError(name)
        tools[name] = tool
    return tools


# ---------------------------------------------------------------------------
# Built-in tools
# ---------------------------------------------------------------------------
class EchoParams(BaseModel):
    """Arguments for the ``echo`` tool."""

    text: str = Field(..., description="Text to echo back")


class CurrentTimeParams(BaseModel):
    """Arguments for the ``current_time`` tool (none)."""


@register_tool("echo", EchoParams)
def echo_tool(params: EchoParams) -> str:
    """Echo the input text back to the caller."""
    return params.text


@register_tool("current_time", CurrentTimeParams)
def current_time_tool(params: CurrentTimeParams) -> str:  # pylint: disable=unused-argument
    """Return the current UTC time in ISO-8601 format."""
    return datetime.now(timezone.utc).isoformat()
