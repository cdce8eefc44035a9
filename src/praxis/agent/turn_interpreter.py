"""Classifies one model response as tool calls, a step, completion, or garbage."""

import logging
from enum import Enum
from typing import (
    List,
    Literal,
    Union,
)

from pydantic import BaseModel

from praxis.core.schema import (
    Message,
    ModelResponse,
    TaskComplete,
    TaskStep,
    ToolCall,
)

logger = logging.getLogger(__name__)


class TurnKind(str, Enum):
    """Categories a model response can fall into."""

    TOOL_CALLS = "tool_calls"
    STEP = "step"
    COMPLETE = "complete"
    MALFORMED = "malformed"


class ToolCallsTurn(BaseModel):
    """The model asked for tools to be run."""

    kind: Literal[TurnKind.TOOL_CALLS] = TurnKind.TOOL_CALLS
    message: Message
    tool_calls: List[ToolCall]


class StepTurn(BaseModel):
    """The model reported intermediate progress."""

    kind: Literal[TurnKind.STEP] = TurnKind.STEP
    step: TaskStep


class CompleteTurn(BaseModel):
    """The model declared the task complete."""

    kind: Literal[TurnKind.COMPLETE] = TurnKind.COMPLETE
    complete: TaskComplete


class MalformedTurn(BaseModel):
    """Neither tool calls nor a task result could be found."""

    kind: Literal[TurnKind.MALFORMED] = TurnKind.MALFORMED
    reason: str


Turn = Union[ToolCallsTurn, StepTurn, CompleteTurn, MalformedTurn]


def interpret_response(response: ModelResponse) -> Turn:
    """
    Decide what a model response means.

    Tool calls take precedence: if the response carries any, a structured payload delivered in the
    same response is dropped and only considered again on the next turn.
    """
    tool_calls = response.message.tool_calls or []
    if tool_calls:
        if response.parsed is not None:
            logger.warning(
                "Response carries %d tool calls and a '%s' payload; ignoring the payload",
                len(tool_calls),
                response.parsed.kind,
            )
        return ToolCallsTurn(message=response.message, tool_calls=list(tool_calls))

    parsed = response.parsed
    if isinstance(parsed, TaskStep):
        return StepTurn(step=parsed)
    if isinstance(parsed, TaskComplete):
        return CompleteTurn(complete=parsed)

    content = response.message.content
    return MalformedTurn(
        reason=f"No tool calls and no parsed task result in response (content={content!r})"
    )
