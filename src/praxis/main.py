"""
Praxis entry point.

This file handles startup concerns (arg-parsing, logging) and either runs a single task from the
command line or launches the REST API.
"""

import argparse
import asyncio
import logging
import sys

from praxis.agent.agent_loop import execute_task
from praxis.agent.errors import TaskExecutionError
from praxis.common import (
    print_failure,
    print_result,
    print_step,
)
from praxis.config import settings
from praxis.core.context import build_context
from praxis.core.schema import (
    Agent,
    Workflow,
)
from praxis.tools import get_tools

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _init_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        stream=sys.stdout,
    )
    # Model SDKs log every request through httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a Praxis agent")
    parser.add_argument(
        "--mode",
        choices=["run", "api"],
        type=str.lower,
        default="run",
        help="Run a single task from the command line or serve the REST API (default: run)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        type=str.lower,
        default=settings.LOG_LEVEL,
        help="Logging level (default from env: %(default)s)",
    )

    task = parser.add_argument_group("task options (run mode)")
    task.add_argument("--role", default="a helpful assistant", help="Role the agent plays")
    task.add_argument("--description", default="", help="Further description of the agent")
    task.add_argument("--workflow", help="What the task is about")
    task.add_argument("--output", default="", help="What the expected output looks like")
    task.add_argument(
        "--tool",
        action="append",
        default=[],
        dest="tools",
        help="Registered tool to give the agent (repeatable)",
    )
    task.add_argument("--model", default=settings.DEFAULT_MODEL, help="Model identifier")
    task.add_argument("--max-turns", type=int, default=None, help="Turn ceiling for the task")
    return parser


def run_cli(args: argparse.Namespace) -> int:
    """Run one task described by *args* and print its result. Returns the exit code."""
    context = build_context(Workflow(description=args.workflow, output=args.output))

    try:
        agent = Agent(
            role=args.role,
            description=args.description,
            model=args.model,
            tools=get_tools(args.tools) or None,
        )
        result = asyncio.run(
            execute_task(agent, context.messages, max_turns=args.max_turns, on_step=print_step)
        )
    except TaskExecutionError as exc:
        logger.error("Task failed: %s", exc)
        print_failure(exc)
        return 1

    print_result(result)
    return 0


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main(argv: list[str] | None = None) -> None:
    """
    Main entry point for the Praxis application.

    This function sets up the command-line interface, initializes logging, and either runs one task
    or starts the API server.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    args = parser.parse_args(argv)

    # Override log level setting with command-line argument
    settings.LOG_LEVEL = args.log_level

    _init_logging(settings.LOG_LEVEL)

    logger.info("Starting Praxis [%s mode]", args.mode)
    logger.debug(
        "Settings: %s", settings.model_dump(exclude={"OPENAI_API_KEY", "ANTHROPIC_API_KEY"})
    )

    if args.mode == "api":
        # Lazy import to avoid web dependencies if not needed
        from praxis.api.app import run_api  # pylint: disable=import-outside-toplevel

        run_api(host="0.0.0.0", port=settings.API_PORT, reload=settings.DEBUG)
        return

    if not args.workflow:
        parser.error("--workflow is required in run mode")
    sys.exit(run_cli(args))


if __name__ == "__main__":
    main()
