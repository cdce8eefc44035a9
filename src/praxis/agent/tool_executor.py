"""Describes an agent's tools to the model and dispatches the tool calls it requests."""

import asyncio
import inspect
import logging
from typing import (
    Any,
    Callable,
    List,
    Sequence,
    Type,
)

from pydantic import (
    BaseModel,
    ConfigDict,
)
from pydantic_core import to_json

from praxis.agent.errors import (
    NonFunctionToolCallError,
    UnknownToolError,
)
from praxis.core.schema import (
    Agent,
    Message,
    ToolCall,
)

logger = logging.getLogger(__name__)


class FunctionTool(BaseModel):
    """Callable-function description handed to the model client."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str
    parameters: Type[BaseModel]
    function: Callable[..., Any]


def describe_tools(agent: Agent) -> List[FunctionTool]:
    """Return one function description per tool of *agent* (empty if it has none)."""
    return [
        FunctionTool(
            name=name,
            description=tool.description,
            parameters=tool.parameters,
            function=tool.execute,
        )
        for name, tool in (agent.tools or {}).items()
    ]


async def execute_tool_call(agent: Agent, call: ToolCall) -> Message:
    """
    Run a single tool call and wrap its result in a tool message.

    Parameters
    ----------
    agent:
        The agent whose tool mapping the call is resolved against.
    call:
        The tool call requested by the model.

    Returns
    -------
    Message
        A ``tool`` message answering *call*, with the JSON-serialised tool result as content.

    Raises
    ------
    NonFunctionToolCallError
        If *call* is not a function call.
    UnknownToolError
        If the agent has no tool with the requested name.

    Argument validation errors and whatever the tool itself raises are propagated unchanged.
    """
    if call.type != "function" or call.function is None:
        raise NonFunctionToolCallError(f"Tool call '{call.id}' is not a function (type={call.type})")

    name = call.function.name
    tool = (agent.tools or {}).get(name)
    if tool is None:
        raise UnknownToolError(name)

    params = tool.parameters.model_validate_json(call.function.arguments or "{}")
    logger.debug("Executing tool '%s' (call %s) with args=%s", name, call.id, params)

    if inspect.iscoroutinefunction(tool.execute):
        result = await tool.execute(params)
    else:
        result = await asyncio.to_thread(tool.execute, params)
    # Wrappers and objects with an async __call__ hand back a coroutine
    if inspect.isawaitable(result):
        result = await result

    logger.debug("Tool '%s' (call %s) returned: %s", name, call.id, result)
    return Message(role="tool", tool_call_id=call.id, content=to_json(result).decode())


async def execute_tool_calls(agent: Agent, calls: Sequence[ToolCall]) -> List[Message]:
    """
    Run every call concurrently and return the tool messages in request order.

    The first failing call propagates; no partial results are returned.  Calls still pending at
    that point are cancelled.  Sync tools already running in a worker thread finish in the
    background, since threads cannot be interrupted.
    """
    logger.info(
        "Dispatching %d tool calls: %s",
        len(calls),
        [call.function.name if call.function else call.type for call in calls],
    )
    tasks = [asyncio.ensure_future(execute_tool_call(agent, call)) for call in calls]
    try:
        results = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return list(results)
