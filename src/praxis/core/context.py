"""Builds the conversation state a task starts from."""

from typing import (
    Iterable,
    Set,
)

from praxis.agent.errors import InvalidHistoryError
from praxis.core.schema import (
    Context,
    Message,
    Workflow,
)

WORKFLOW_TEMPLATE = """\
Here is description of the workflow and expected output by the user:
<workflow>{description}</workflow>
<output>{output}</output>"""


def build_context(workflow: Workflow, messages: Iterable[Message] | None = None) -> Context:
    """
    Create a context seeded with the workflow description.

    The seeded assistant message always comes first; any *messages* supplied by the caller follow
    it in their original order.
    """
    seed = Message(
        role="assistant",
        content=WORKFLOW_TEMPLATE.format(
            description=workflow.description, output=workflow.output
        ),
    )
    return Context(workflow=workflow, messages=[seed, *(messages or [])])


def validate_history(messages: Iterable[Message]) -> None:
    """
    Check that every tool message answers a call from the immediately prior assistant message.

    Raises
    ------
    InvalidHistoryError
        If a tool message has no matching call or answers the same call twice.
    """
    pending: Set[str] = set()
    answered: Set[str] = set()
    in_tool_block = False

    for index, message in enumerate(messages):
        if message.role == "tool":
            call_id = message.tool_call_id
            if not in_tool_block or call_id not in pending:
                raise InvalidHistoryError(
                    f"Tool message at position {index} does not answer a preceding tool call"
                    f" (tool_call_id={call_id!r})"
                )
            if call_id in answered:
                raise InvalidHistoryError(
                    f"Tool call {call_id!r} is answered more than once (position {index})"
                )
            answered.add(call_id)
            continue

        in_tool_block = message.role == "assistant" and bool(message.tool_calls)
        pending = {call.id for call in message.tool_calls or []} if in_tool_block else set()
        answered = set()
