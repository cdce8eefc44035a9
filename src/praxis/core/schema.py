"""
Schema definitions for agent <-> model <-> tool messages.

These data models serve as the contract between the model client, the execution loop, and
individual tools.  We keep them separate from runtime logic so they can be imported anywhere without
side-effects.
"""

from typing import (
    Any,
    Callable,
    Dict,
    List,
    Literal,
    Optional,
    Type,
    Union,
)

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)

Role = Literal["system", "assistant", "user", "tool"]


# ---------------------------------------------------------------------------
# Conversation
# ---------------------------------------------------------------------------
class FunctionCall(BaseModel):
    """Function name plus the raw JSON arguments produced by the model."""

    name: str
    arguments: str = "{}"


class ToolCall(BaseModel):
    """A call that the model wants the agent to execute."""

    id: str = Field(..., description="Identifier echoed back by the answering tool message")
    type: str = "function"
    function: Optional[FunctionCall] = None


class Message(BaseModel):
    """One conversation turn."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    tool_call_id: Optional[str] = None


class Workflow(BaseModel):
    """What the user wants done and what the result should look like."""

    description: str
    output: str


class Context(BaseModel):
    """Workflow reference plus the ordered messages accumulated so far."""

    model_config = ConfigDict(frozen=True)

    workflow: Workflow
    messages: List[Message] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Agents & tools
# ---------------------------------------------------------------------------
class Tool(BaseModel):
    """A capability the model may invoke by name."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    parameters: Type[BaseModel]
    description: str = ""
    execute: Callable[..., Any]


class Agent(BaseModel):
    """A configured role with a model target and a set of callable tools."""

    model_config = ConfigDict(frozen=True)

    role: str
    description: str = ""
    model: str
    tools: Optional[Dict[str, Tool]] = None


# ---------------------------------------------------------------------------
# Structured turn results
# ---------------------------------------------------------------------------
class TaskStep(BaseModel):
    """Intermediate progress reported by the model."""

    kind: Literal["step"]
    name: str = Field(..., description="The name of the step")
    result: str = Field(..., description="The result of the step")
    reasoning: str = Field(..., description="The reasoning for this step")


class TaskComplete(BaseModel):
    """Final answer for the task."""

    kind: Literal["complete"]
    result: str = Field(..., description="The final result of the task")
    reasoning: str = Field(..., description="The reasoning for completing the task")


TaskResult = Union[TaskStep, TaskComplete]


class TaskResultEnvelope(BaseModel):
    """Response format requested from the model on every turn."""

    response: TaskResult


class ModelResponse(BaseModel):
    """Normalised reply of a model client."""

    message: Message
    parsed: Optional[TaskResult] = None


class TaskOutcome(BaseModel):
    """Final result of a task together with the conversation that produced it."""

    result: str
    messages: List[Message]
    turns: int
