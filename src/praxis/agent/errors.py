"""Errors raised while driving a task to completion."""


class TaskExecutionError(RuntimeError):
    """Base class for every failure that aborts a task."""


class UnknownToolError(TaskExecutionError):
    """Raised when a tool call references a name the agent does not have."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class NonFunctionToolCallError(TaskExecutionError):
    """Raised when the model requests a tool call that is not a function call."""


class MalformedResponseError(TaskExecutionError):
    """Raised when a model response carries neither tool calls nor a task result."""


class IllegalStateError(TaskExecutionError):
    """Raised when turn handling reaches a branch that should be unreachable."""


class InvalidHistoryError(TaskExecutionError):
    """Raised when a message history contains tool responses without a matching call."""


class TurnLimitExceededError(TaskExecutionError):
    """Raised when a task runs out of its configured turn budget."""

    def __init__(self, max_turns: int):
        super().__init__(f"Task did not complete within {max_turns} turns")
        self.max_turns = max_turns
