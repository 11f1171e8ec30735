"""Register a task definition and run it like an existing ECS service."""

from __future__ import annotations

from typing import Any, Optional

import boto3
from pydantic import BaseModel

from . import log
from .config import RunTaskConfig
from .ecs import (
    confirm_task_success,
    describe_service,
    register_task_definition,
    run_tasks,
    wait_for_tasks_stopped,
)
from .task_definition import load_task_definition


class RunTaskResult(BaseModel):
    """Outcome of a successful run_task call."""

    task_definition_arn: str
    task_arns: list[str]
    waited: bool = False


def run_task(config: RunTaskConfig, ecs: Optional[Any] = None) -> RunTaskResult:
    """Register config.task_definition and run it on the service's cluster.

    The launch type and network configuration are copied from the service,
    not from the task definition. When config.should_wait is set, blocks until
    the tasks stop and raises if any container exited non-zero.

    Nothing is rolled back on failure: a registered revision or launched task
    stays in place.
    """
    if ecs is None:
        ecs = boto3.client("ecs", region_name=config.region)

    # Parse before touching the API so a bad file fails fast
    path = config.task_definition_path
    task_definition = load_task_definition(path)
    log.info(f"Task definition file: {path}")

    service = describe_service(ecs, config.cluster, config.service)
    log.info(
        f"Service: {config.service} (launch type: {service.get('launchType', '-')})"
    )

    task_definition_arn = register_task_definition(ecs, task_definition)
    log.info(f"Registered task definition: {task_definition_arn}")

    task_arns = run_tasks(ecs, config.cluster, task_definition_arn, config.count, service)
    for task_arn in task_arns:
        log.info(f"Started task: {task_arn}")

    result = RunTaskResult(task_definition_arn=task_definition_arn, task_arns=task_arns)
    if not config.should_wait:
        return result

    log.info(f"Waiting up to {config.wait_for_minutes} minute(s) for tasks to stop...")
    wait_for_tasks_stopped(
        ecs,
        config.cluster,
        task_arns,
        minutes=config.wait_for_minutes,
        max_attempts=config.max_attempts,
    )
    confirm_task_success(ecs, config.cluster, task_arns)
    log.info("All containers exited successfully")

    result.waited = True
    return result
