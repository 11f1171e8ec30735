"""CLI for running a one-off ECS task next to an existing service."""

import argparse
import os
import sys
import traceback
from pathlib import Path
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from . import log
from .config import DEFAULT_WAIT_MINUTES, RunTaskConfig
from .runner import run_task


def _input_default(name: str) -> Optional[str]:
    """Read a GitHub Actions input (INPUT_<NAME>) from the environment.

    The runner keeps hyphens in input names; the underscore spelling is
    accepted too since some shells can't export hyphenated variables.
    """
    key = f"INPUT_{name.upper()}"
    value = os.environ.get(key)
    if value is None:
        value = os.environ.get(key.replace("-", "_"))
    if value is None or value.strip() == "":
        return None
    return value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Register a task definition and run it on ECS with the same launch type "
            "and network configuration as an existing service"
        )
    )
    parser.add_argument(
        "--cluster",
        default=_input_default("cluster"),
        help="ECS cluster name or ARN (env: INPUT_CLUSTER)",
    )
    parser.add_argument(
        "--service",
        default=_input_default("service"),
        help="Service whose launch type and network configuration are reused (env: INPUT_SERVICE)",
    )
    parser.add_argument(
        "--count",
        default=_input_default("count"),
        help="Number of tasks to run (env: INPUT_COUNT)",
    )
    parser.add_argument(
        "--task-definition",
        default=_input_default("task-definition"),
        help="Path to a YAML or JSON task definition; relative paths are resolved "
        "against the workspace (env: INPUT_TASK-DEFINITION)",
    )
    parser.add_argument(
        "--wait-for-finish",
        default=_input_default("wait-for-finish"),
        help="'true' to wait for the tasks to stop and check exit codes (env: INPUT_WAIT-FOR-FINISH)",
    )
    parser.add_argument(
        "--wait-for-minutes",
        default=_input_default("wait-for-minutes"),
        help=f"How long to wait for the tasks to stop (default: {DEFAULT_WAIT_MINUTES})",
    )
    parser.add_argument("--region", default=None, help="AWS region (default: from AWS config/profile)")
    parser.add_argument(
        "--workspace",
        default=None,
        help="Base directory for relative task definition paths (default: $GITHUB_WORKSPACE or cwd)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print every ECS request and response",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    log.configure(verbose=args.verbose)

    missing = [
        f"--{name.replace('_', '-')}"
        for name in ("cluster", "service", "count", "task_definition", "wait_for_finish")
        if getattr(args, name) is None
    ]
    if missing:
        parser.error(f"missing required input(s): {', '.join(missing)}")

    # Get region from the session if not given
    region = args.region
    if region is None:
        region = boto3.Session().region_name

    options = {
        "cluster": args.cluster,
        "service": args.service,
        "count": args.count,
        "task_definition": args.task_definition,
        "wait_for_finish": args.wait_for_finish,
        "region": region,
    }
    if args.wait_for_minutes is not None:
        options["wait_for_minutes"] = args.wait_for_minutes
    if args.workspace:
        options["workspace"] = Path(args.workspace)

    try:
        config = RunTaskConfig(**options)
    except ValidationError as e:
        parser.error(str(e))

    log.info(f"Cluster: {config.cluster}")
    log.info(f"Region: {config.region or '-'}")

    try:
        result = run_task(config)
    except (RuntimeError, ClientError, BotoCoreError) as e:
        log.error(str(e))
        log.debug(traceback.format_exc())
        sys.exit(1)

    print(result.task_definition_arn)
    for task_arn in result.task_arns:
        print(task_arn)


if __name__ == "__main__":
    main()
