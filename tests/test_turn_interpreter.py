"""Tests for classifying model responses."""

from conftest import (
    call,
    complete,
    step,
    tool_calls,
)
from praxis.agent.turn_interpreter import (
    CompleteTurn,
    MalformedTurn,
    StepTurn,
    ToolCallsTurn,
    TurnKind,
    interpret_response,
)
from praxis.core.schema import (
    Message,
    ModelResponse,
    TaskComplete,
)


def test_tool_calls() -> None:
    response = tool_calls(call("a", "echo", text="x"), call("b", "echo", text="y"))

    turn = interpret_response(response)

    assert isinstance(turn, ToolCallsTurn)
    assert turn.kind is TurnKind.TOOL_CALLS
    assert [c.id for c in turn.tool_calls] == ["a", "b"]
    assert turn.message == response.message


def test_step() -> None:
    turn = interpret_response(step("research", "found three papers"))

    assert isinstance(turn, StepTurn)
    assert turn.kind is TurnKind.STEP
    assert turn.step.name == "research"
    assert turn.step.result == "found three papers"


def test_complete() -> None:
    turn = interpret_response(complete("all done"))

    assert isinstance(turn, CompleteTurn)
    assert turn.kind is TurnKind.COMPLETE
    assert turn.complete.result == "all done"


def test_tool_calls_take_precedence_over_payload() -> None:
    response = ModelResponse(
        message=Message(role="assistant", tool_calls=[call("a", "echo", text="x")]),
        parsed=TaskComplete(kind="complete", result="too early", reasoning="r"),
    )

    assert isinstance(interpret_response(response), ToolCallsTurn)


def test_malformed() -> None:
    turn = interpret_response(
        ModelResponse(message=Message(role="assistant", content="just chatting"))
    )

    assert isinstance(turn, MalformedTurn)
    assert turn.kind is TurnKind.MALFORMED
    assert "just chatting" in turn.reason


def test_empty_tool_call_list_is_not_a_tool_turn() -> None:
    response = ModelResponse(message=Message(role="assistant", tool_calls=[]))

    assert isinstance(interpret_response(response), MalformedTurn)
