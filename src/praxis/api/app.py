"""
Core API backend for Praxis.

It exposes the following endpoints:
- **GET /health**  - liveness probe for health checks.
- **GET /tools**   - list the registered tools.
- **POST /tasks**  - run one task to completion and return its result.
"""

import logging
from typing import List

from fastapi import (
    Depends,
    FastAPI,
    HTTPException,
)

from praxis.agent.agent_loop import run_task
from praxis.agent.errors import (
    InvalidHistoryError,
    TaskExecutionError,
    UnknownToolError,
)
from praxis.agent.model_client import (
    ModelClient,
    load_client,
)
from praxis.api.models import (
    TaskRequest,
    TaskResponse,
    ToolInfo,
)
from praxis.common import print_server_banner
from praxis.config import settings
from praxis.core.context import build_context
from praxis.core.schema import Agent
from praxis.tools import (
    TOOL_REGISTRY,
    get_tools,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Praxis API", version="0.1.0", description="Praxis task execution API")


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------
def get_model_client() -> ModelClient:
    """Return the model client used to serve requests (overridable in tests)."""
    return load_client()


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@app.get("/health", summary="Health check")
async def health() -> dict[str, str]:
    """Return a simple liveness payload."""
    return {"status": "ok"}


@app.get("/tools", response_model=List[ToolInfo], summary="List registered tools")
async def list_tools() -> List[ToolInfo]:
    """List every tool an agent can be given."""
    return [
        ToolInfo(name=name, description=tool.description) for name, tool in TOOL_REGISTRY.items()
    ]


@app.post("/tasks", response_model=TaskResponse, summary="Run a task")
async def task_endpoint(
    req: TaskRequest, client: ModelClient = Depends(get_model_client)
) -> TaskResponse:
    """Build an agent from the request and drive it until the task completes."""
    try:
        tools = get_tools(req.tools)
    except UnknownToolError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    agent = Agent(
        role=req.role,
        description=req.description,
        model=req.model or settings.DEFAULT_MODEL,
        tools=tools or None,
    )
    context = build_context(req.workflow, req.messages)
    logger.debug("Running task with %d seeded messages", len(context.messages))

    try:
        outcome = await run_task(agent, context.messages, client=client, max_turns=req.max_turns)
    except InvalidHistoryError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except TaskExecutionError as exc:
        logger.warning("Task failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return TaskResponse(result=outcome.result, turns=outcome.turns, messages=outcome.messages)


# ---------------------------------------------------------------------------
# Public helper to launch the API (imported by main.py)
# ---------------------------------------------------------------------------
def run_api(
    host: str = "0.0.0.0", port: int = 8000, reload: bool = False, log_level: str | None = None
) -> None:
    """Start a uvicorn server hosting *app*.

    Parameters
    ----------
    host, port:
        Bind address for the HTTP server.
    reload:
        If *True*, enable auto-reload.
    log_level:
        Logging level to use (default from settings if not provided).
    """

    # Lazy import - keeps uvicorn out of library imports
    import uvicorn  # pylint: disable=import-outside-toplevel

    if log_level is None:
        log_level = settings.LOG_LEVEL

    logger.info(
        "Starting Praxis API at %s:%d (reload=%s, log_level=%s)", host, port, reload, log_level
    )
    print_server_banner(host, port)
    uvicorn.run("praxis.api.app:app", host=host, port=port, reload=reload, log_level=log_level)


if __name__ == "__main__":
    run_api(reload=True)
