"""Shared fixtures: a deterministic model client and response builders."""

import json
from typing import (
    Any,
    Dict,
    List,
    Sequence,
)

import pytest

from praxis.agent.model_client import ModelClient
from praxis.core.schema import (
    FunctionCall,
    Message,
    ModelResponse,
    TaskComplete,
    TaskStep,
    ToolCall,
)


class FakeModelClient(ModelClient):
    """Replays scripted responses and records every invocation."""

    def __init__(self, responses: Sequence[ModelResponse]):
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    async def complete(self, *, model, messages, tools, response_format) -> ModelResponse:
        self.calls.append(
            {
                "model": model,
                "messages": list(messages),
                "tools": tools,
                "response_format": response_format,
            }
        )
        if not self._responses:
            raise AssertionError("FakeModelClient ran out of scripted responses")
        return self._responses.pop(0)


def step(name: str, result: str, reasoning: str = "because") -> ModelResponse:
    """A response reporting an intermediate step."""
    return ModelResponse(
        message=Message(role="assistant"),
        parsed=TaskStep(kind="step", name=name, result=result, reasoning=reasoning),
    )


def complete(result: str, reasoning: str = "done") -> ModelResponse:
    """A response completing the task."""
    return ModelResponse(
        message=Message(role="assistant"),
        parsed=TaskComplete(kind="complete", result=result, reasoning=reasoning),
    )


def call(call_id: str, name: str, **arguments: Any) -> ToolCall:
    """A function-style tool call."""
    return ToolCall(id=call_id, function=FunctionCall(name=name, arguments=json.dumps(arguments)))


def tool_calls(*calls: ToolCall) -> ModelResponse:
    """A response requesting tool calls."""
    return ModelResponse(message=Message(role="assistant", tool_calls=list(calls)))


@pytest.fixture
def fake_client_factory():
    """Build a :class:`FakeModelClient` from scripted responses."""
    return FakeModelClient
