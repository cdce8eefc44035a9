"""Praxis: drive a single agent through a task with a language model and tools."""

from praxis.agent.agent_loop import (
    execute_task,
    run_task,
)
from praxis.core.context import build_context
from praxis.core.schema import (
    Agent,
    Message,
    Tool,
    Workflow,
)

__all__ = [
    "Agent",
    "Message",
    "Tool",
    "Workflow",
    "build_context",
    "execute_task",
    "run_task",
]
