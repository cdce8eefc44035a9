"""
Model client interface for Praxis.

This module is the only place that *directly* calls an LLM.  Everything else (execution loop, tools,
context) stays model-agnostic and receives a :class:`ModelClient` explicitly.

We support two back-ends out of the box:

1. **OpenAI** via structured-output chat completions.
2. **Anthropic** via the Messages API, with the structured result requested as a reserved tool.

Additional providers can be added by subclassing :class:`ModelClient` and registering via
:func:`register_client`.
"""

import json
import logging
from abc import (
    ABC,
    abstractmethod,
)
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Sequence,
    Tuple,
    Type,
)

from pydantic import ValidationError

from praxis.agent.tool_executor import FunctionTool
from praxis.config import settings
from praxis.core.schema import (
    FunctionCall,
    Message,
    ModelResponse,
    TaskResultEnvelope,
    ToolCall,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Registry helpers
# ---------------------------------------------------------------------------
_CLIENT_REGISTRY: dict[str, Type["ModelClient"]] = {}


def register_client(name: str) -> Callable:
    """Decorator to register a model client class under *name*."""

    def wrapper(cls: Type["ModelClient"]) -> Type["ModelClient"]:
        _CLIENT_REGISTRY[name] = cls
        return cls

    return wrapper


def load_client(name: str | None = None) -> "ModelClient":
    """
    Factory that returns an instantiated model client.

    Fallback order:
    1. *name* arg
    2. ``settings.MODEL_PROVIDER`` env option
    """

    target = name or settings.MODEL_PROVIDER
    cls = _CLIENT_REGISTRY.get(target.lower())
    if cls is None:
        raise ValueError(f"Model client '{target}' is not registered.")
    return cls()


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------
class ModelClient(ABC):
    """Abstract model client that turns a conversation into one model response."""

    @abstractmethod
    async def complete(
        self,
        *,
        model: str,
        messages: Sequence[Message],
        tools: Sequence[FunctionTool] | None,
        response_format: Type[TaskResultEnvelope],
    ) -> ModelResponse:
        """
        Run one model invocation.

        *tools* is ``None`` when the agent has no tools.  The returned response either carries tool
        calls on its message or a parsed task result (or neither, if the model misbehaved).
        """


# ---------------------------------------------------------------------------
# Concrete clients
# ---------------------------------------------------------------------------
@register_client("openai")
class OpenAIModelClient(ModelClient):
    """OpenAI-based client using structured outputs."""

    def __init__(self, client: Any | None = None):
        if client is None:
            import openai  # pylint: disable=import-outside-toplevel

            client = openai.AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        self._client = client

    async def complete(
        self,
        *,
        model: str,
        messages: Sequence[Message],
        tools: Sequence[FunctionTool] | None,
        response_format: Type[TaskResultEnvelope],
    ) -> ModelResponse:
        import openai  # pylint: disable=import-outside-toplevel

        kwargs: Dict[str, Any] = {
            "model": model,
            "messages": [message.model_dump(exclude_none=True) for message in messages],
            "response_format": response_format,
        }
        if tools:
            kwargs["tools"] = [
                openai.pydantic_function_tool(
                    tool.parameters, name=tool.name, description=tool.description
                )
                for tool in tools
            ]

        completion = await self._client.chat.completions.parse(**kwargs)
        message = completion.choices[0].message
        logger.debug("OpenAI response message: %s", message)

        tool_calls = [
            ToolCall(
                id=call.id,
                type=call.type,
                function=(
                    FunctionCall(name=call.function.name, arguments=call.function.arguments)
                    if call.type == "function"
                    else None
                ),
            )
            for call in message.tool_calls or []
        ]
        parsed = message.parsed.response if message.parsed is not None else None
        if parsed is None and not tool_calls and getattr(message, "refusal", None):
            logger.warning("OpenAI refused the request: %s", message.refusal)

        return ModelResponse(
            message=Message(
                role="assistant", content=message.content, tool_calls=tool_calls or None
            ),
            parsed=parsed,
        )


@register_client("anthropic")
class AnthropicModelClient(ModelClient):
    """
    Anthropic Claude-based client.

    The Messages API has no response-format option, so the task result is offered to the model as
    one more tool (``task_result``) whose input schema is the result envelope, and the model is
    required to call at least one tool per turn.
    """

    RESULT_TOOL = "task_result"
    KICKOFF_PROMPT = "Begin working on the task."

    def __init__(self, client: Any | None = None, max_tokens: int | None = None):
        if client is None:
            import anthropic  # pylint: disable=import-outside-toplevel

            client = anthropic.AsyncAnthropic(api_key=settings.ANTHROPIC_API_KEY)
        self._client = client
        self._max_tokens = max_tokens or settings.ANTHROPIC_MAX_TOKENS

    async def complete(
        self,
        *,
        model: str,
        messages: Sequence[Message],
        tools: Sequence[FunctionTool] | None,
        response_format: Type[TaskResultEnvelope],
    ) -> ModelResponse:
        system, converted = self._convert_messages(messages)

        tool_defs = [
            {
                "name": tool.name,
                "description": tool.description,
                "input_schema": tool.parameters.model_json_schema(),
            }
            for tool in tools or []
        ]
        tool_defs.append(
            {
                "name": self.RESULT_TOOL,
                "description": "Report the outcome of this turn: an intermediate step or the "
                "completed task.",
                "input_schema": response_format.model_json_schema(),
            }
        )

        response = await self._client.messages.create(
            model=model,
            max_tokens=self._max_tokens,
            system=system,
            messages=converted,
            tools=tool_defs,
            tool_choice={"type": "any"},
        )
        logger.debug("Anthropic response content: %s", response.content)

        texts: List[str] = []
        tool_calls: List[ToolCall] = []
        problems: List[str] = []
        parsed = None
        for block in response.content:
            if block.type == "text":
                texts.append(block.text)
            elif block.type == "tool_use" and block.name == self.RESULT_TOOL:
                try:
                    parsed = response_format.model_validate(block.input).response
                except ValidationError as e:
                    logger.warning(
                        "Invalid %s payload %s: %s", self.RESULT_TOOL, block.input, e
                    )
                    problems.append(f"Invalid {self.RESULT_TOOL} payload {block.input!r}: {e}")
            elif block.type == "tool_use":
                tool_calls.append(
                    ToolCall(
                        id=block.id,
                        function=FunctionCall(name=block.name, arguments=json.dumps(block.input)),
                    )
                )

        # Without tool calls the turn is malformed; keep the reason on the message
        if not tool_calls:
            texts.extend(problems)

        return ModelResponse(
            message=Message(
                role="assistant",
                content="\n".join(texts) or None,
                tool_calls=tool_calls or None,
            ),
            parsed=parsed,
        )

    def _convert_messages(
        self, messages: Sequence[Message]
    ) -> Tuple[str, List[Dict[str, Any]]]:
        """Split out system text and translate the rest into Anthropic message dicts."""
        system_parts: List[str] = []
        converted: List[Dict[str, Any]] = []

        for message in messages:
            if message.role == "system":
                system_parts.append(message.content or "")
            elif message.role == "tool":
                block = {
                    "type": "tool_result",
                    "tool_use_id": message.tool_call_id,
                    "content": message.content or "",
                }
                # Results for one assistant turn share a single user message
                last = converted[-1] if converted else None
                if (
                    last is not None
                    and last["role"] == "user"
                    and isinstance(last["content"], list)
                    and last["content"][-1]["type"] == "tool_result"
                ):
                    last["content"].append(block)
                else:
                    converted.append({"role": "user", "content": [block]})
            elif message.role == "assistant" and message.tool_calls:
                blocks: List[Dict[str, Any]] = []
                if message.content:
                    blocks.append({"type": "text", "text": message.content})
                for call in message.tool_calls:
                    if call.function is None:
                        continue
                    blocks.append(
                        {
                            "type": "tool_use",
                            "id": call.id,
                            "name": call.function.name,
                            "input": json.loads(call.function.arguments or "{}"),
                        }
                    )
                converted.append({"role": "assistant", "content": blocks})
            else:
                converted.append({"role": message.role, "content": message.content or ""})

        # The Messages API expects the conversation to open with a user turn
        if not converted or converted[0]["role"] != "user":
            converted.insert(0, {"role": "user", "content": self.KICKOFF_PROMPT})

        return "\n\n".join(system_parts), converted
