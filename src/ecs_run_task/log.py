"""Status and trace output for ecs_run_task.

Status lines go to stderr with an ``[ecs_run_task]`` prefix. Request/response
traces are only printed in verbose mode. When running as a GitHub Actions
step, traces and errors are written as workflow commands instead so they show
up in the step's debug log and annotations.
"""

from __future__ import annotations

import json
import os
import sys
from typing import Any

PREFIX = "[ecs_run_task]"

_verbose = False


def configure(verbose: bool = False) -> None:
    """Enable or disable trace output. RUNNER_DEBUG=1 always enables it."""
    global _verbose
    _verbose = verbose or os.environ.get("RUNNER_DEBUG") == "1"


def in_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def escape_command_data(message: str) -> str:
    """Escape a message for use in a workflow command."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def info(message: str) -> None:
    print(f"{PREFIX} {message}", file=sys.stderr)


def debug(message: str) -> None:
    if in_github_actions():
        # The runner filters ::debug:: lines itself
        print(f"::debug::{escape_command_data(message)}", flush=True)
    elif _verbose:
        print(f"{PREFIX} debug: {message}", file=sys.stderr)


def trace(name: str, payload: Any) -> None:
    """Trace a request or response as ``<name> - <json>``."""
    if not (_verbose or in_github_actions()):
        return
    debug(f"{name} - {json.dumps(payload, default=str)}")


def error(message: str) -> None:
    if in_github_actions():
        print(f"::error::{escape_command_data(message)}", flush=True)
    print(f"Error: {message}", file=sys.stderr)
