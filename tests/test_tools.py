"""Tests for the tool registry and the built-in tools."""

from datetime import datetime

import pytest
from pydantic import BaseModel

from praxis.agent.errors import UnknownToolError
from praxis.tools import (
    TOOL_REGISTRY,
    CurrentTimeParams,
    EchoParams,
    get_tools,
    register_tool,
)


class AddParams(BaseModel):
    a: int
    b: int


# This is a stub tool for testing purposes.
@register_tool("test_add", AddParams)
def _add(params: AddParams) -> int:
    """Return the sum of two integers (used only for tests)."""

    return params.a + params.b


def test_register_tool_uses_docstring() -> None:
    tool = TOOL_REGISTRY["test_add"]

    assert tool.parameters is AddParams
    assert tool.description == "Return the sum of two integers (used only for tests)."
    assert tool.execute(AddParams(a=2, b=3)) == 5


def test_register_tool_rejects_duplicates() -> None:
    with pytest.raises(ValueError):
        register_tool("test_add", AddParams)


def test_get_tools() -> None:
    tools = get_tools(["echo", "test_add"])

    assert list(tools) == ["echo", "test_add"]


def test_get_tools_unknown() -> None:
    with pytest.raises(UnknownToolError):
        get_tools(["echo", "missing"])


def test_builtin_tools() -> None:
    assert TOOL_REGISTRY["echo"].execute(EchoParams(text="hi")) == "hi"
    stamp = TOOL_REGISTRY["current_time"].execute(CurrentTimeParams())
    assert datetime.fromisoformat(stamp).tzinfo is not None
