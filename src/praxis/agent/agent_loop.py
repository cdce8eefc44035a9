"""Main execution loop for Praxis."""

from __future__ import annotations

import logging
from typing import (
    Callable,
    List,
    Sequence,
)

from praxis.agent.errors import (
    IllegalStateError,
    MalformedResponseError,
    TurnLimitExceededError,
)
from praxis.agent.model_client import (
    ModelClient,
    load_client,
)
from praxis.agent.tool_executor import (
    describe_tools,
    execute_tool_calls,
)
from praxis.agent.turn_interpreter import (
    CompleteTurn,
    MalformedTurn,
    StepTurn,
    ToolCallsTurn,
    interpret_response,
)
from praxis.config import settings
from praxis.core.context import validate_history
from praxis.core.schema import (
    Agent,
    Message,
    TaskOutcome,
    TaskResultEnvelope,
    TaskStep,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are {role}. {description}

Your job is to complete the assigned task.
1. You can break down the task into steps
2. You can use available tools when needed

First try to complete the task on your own.
Only ask question to the user if you cannot complete the task without their input."""


def build_system_message(agent: Agent) -> Message:
    """Return the system instruction describing *agent* and how it should operate."""
    return Message(
        role="system",
        content=SYSTEM_PROMPT.format(role=agent.role, description=agent.description),
    )


# ---------------------------------------------------------------------------
# Execution loop
# ---------------------------------------------------------------------------
async def run_task(
    agent: Agent,
    messages: Sequence[Message],
    team: Sequence[Agent] = (),
    *,
    client: ModelClient | None = None,
    max_turns: int | None = None,
    on_step: Callable[[TaskStep], None] | None = None,
) -> TaskOutcome:
    """
    Drive *agent* through a task until the model declares it complete.

    Each turn sends ``[system, *messages]`` to the model.  Tool calls are executed concurrently and
    their results appended after the assistant message that requested them; a step appends its
    result text as an assistant message; completion ends the task.

    Parameters
    ----------
    agent:
        The agent to run.  Never modified.
    messages:
        Initial conversation (usually ``build_context(workflow).messages``).  May be empty.
    team:
        Other agents of the team.  Informational only.
    client:
        Model client to use.  Defaults to :func:`load_client`.
    max_turns:
        Maximum number of model invocations.  Defaults to ``settings.MAX_TURNS``, where
        ``None`` means unlimited.
    on_step:
        Called with every intermediate step the model reports.

    Raises
    ------
    InvalidHistoryError
        If *messages* contains tool responses without a matching tool call.
    UnknownToolError, NonFunctionToolCallError
        If the model requests a tool call the agent cannot serve.
    MalformedResponseError
        If a response carries neither tool calls nor a task result.
    TurnLimitExceededError
        If *max_turns* model invocations did not complete the task.
    """
    validate_history(messages)

    if client is None:
        client = load_client()
    limit = max_turns if max_turns is not None else settings.MAX_TURNS

    tools = describe_tools(agent) or None
    system_message = build_system_message(agent)
    history: List[Message] = list(messages)
    turns = 0

    logger.info(
        "Starting task for agent '%s' (model=%s, tools=%s)",
        agent.role,
        agent.model,
        [tool.name for tool in tools or []],
    )
    if team:
        logger.debug("Team members: %s", [member.role for member in team])

    while True:
        if limit is not None and turns >= limit:
            raise TurnLimitExceededError(limit)
        turns += 1

        response = await client.complete(
            model=agent.model,
            messages=[system_message, *history],
            tools=tools,
            response_format=TaskResultEnvelope,
        )
        turn = interpret_response(response)
        logger.debug("Turn %d classified as %s", turns, type(turn).__name__)

        if isinstance(turn, ToolCallsTurn):
            tool_messages = await execute_tool_calls(agent, turn.tool_calls)
            history = [*history, turn.message, *tool_messages]
        elif isinstance(turn, StepTurn):
            logger.info("Step: %s", turn.step.name)
            logger.debug("Step reasoning: %s", turn.step.reasoning)
            if on_step is not None:
                on_step(turn.step)
            history = [*history, Message(role="assistant", content=turn.step.result)]
        elif isinstance(turn, CompleteTurn):
            logger.info("Task complete after %d turns", turns)
            logger.debug("Completion reasoning: %s", turn.complete.reasoning)
            return TaskOutcome(result=turn.complete.result, messages=history, turns=turns)
        elif isinstance(turn, MalformedTurn):
            raise MalformedResponseError(turn.reason)
        else:
            raise IllegalStateError(f"Unhandled turn: {turn!r}")


async def execute_task(
    agent: Agent,
    messages: Sequence[Message],
    team: Sequence[Agent] = (),
    *,
    client: ModelClient | None = None,
    max_turns: int | None = None,
    on_step: Callable[[TaskStep], None] | None = None,
) -> str:
    """Run a task (see :func:`run_task`) and return only the final result text."""
    outcome = await run_task(
        agent, messages, team, client=client, max_turns=max_turns, on_step=on_step
    )
    return outcome.result
