"""ECS calls used to register and run a task next to an existing service."""

from __future__ import annotations

from typing import Any, Optional

from botocore.exceptions import WaiterError

from . import log
from .config import WAIT_DELAY_SECONDS


class FailureReportedError(RuntimeError):
    """ECS returned a failures list for a describe or run call."""

    def __init__(self, arn: Optional[str], reason: Optional[str]):
        self.arn = arn
        self.reason = reason
        super().__init__(f"{arn} is {reason}")


class WaitTimeoutError(RuntimeError):
    """Tasks did not reach STOPPED within the configured time."""

    def __init__(self, task_arns: list[str], minutes: int):
        self.task_arns = task_arns
        self.minutes = minutes
        super().__init__(
            f"Tasks did not stop within {minutes} minute(s): {', '.join(task_arns)}"
        )


class ContainerExitError(RuntimeError):
    """One or more containers exited with a non-zero code."""

    def __init__(self, reasons: list[str]):
        self.reasons = reasons
        super().__init__("\n".join(reasons))


def raise_on_failures(failures: Optional[list[dict]]) -> None:
    """Raise for the first entry of an ECS failures list, if any."""
    if failures:
        failure = failures[0]
        raise FailureReportedError(failure.get("arn"), failure.get("reason"))


def describe_service(ecs: Any, cluster: str, service: str) -> dict:
    """Return the service description for cluster/service."""
    params = {"cluster": cluster, "services": [service]}

    log.trace("describeServicesParameter", params)
    response = ecs.describe_services(**params)
    log.trace("describeServicesResponse", response)

    raise_on_failures(response.get("failures"))

    if not response.get("services"):
        raise RuntimeError(f"Service {service} not found in cluster {cluster}")
    return response["services"][0]


def register_task_definition(ecs: Any, task_definition: dict[str, Any]) -> str:
    """Register a new task definition revision; return its ARN."""
    log.trace("registerTaskDefinitionParameter", task_definition)
    response = ecs.register_task_definition(**task_definition)
    log.trace("registerTaskDefinitionResponse", response)

    return response["taskDefinition"]["taskDefinitionArn"]


def run_tasks(
    ecs: Any,
    cluster: str,
    task_definition_arn: str,
    count: int,
    service: dict,
) -> list[str]:
    """Run tasks with the service's launch type and network configuration.

    Returns the ARNs of the launched tasks.
    """
    params: dict[str, Any] = {
        "cluster": cluster,
        "count": count,
        "taskDefinition": task_definition_arn,
    }
    # Mirror the service's execution environment; skip what it doesn't set
    # (e.g. capacity-provider services have no launchType)
    for key in ("launchType", "networkConfiguration"):
        if service.get(key) is not None:
            params[key] = service[key]

    log.trace("runTaskParameter", params)
    response = ecs.run_task(**params)
    log.trace("runTaskResponse", response)

    raise_on_failures(response.get("failures"))

    return [task["taskArn"] for task in response.get("tasks", [])]


def wait_for_tasks_stopped(
    ecs: Any,
    cluster: str,
    task_arns: list[str],
    minutes: int,
    max_attempts: int,
) -> None:
    """Block until every task is STOPPED, polling every WAIT_DELAY_SECONDS."""
    params = {
        "cluster": cluster,
        "tasks": task_arns,
        "WaiterConfig": {"Delay": WAIT_DELAY_SECONDS, "MaxAttempts": max_attempts},
    }

    log.trace("waitForParameter", params)
    waiter = ecs.get_waiter("tasks_stopped")
    try:
        waiter.wait(**params)
    except WaiterError as e:
        if e.kwargs.get("reason", "").startswith("Max attempts exceeded"):
            raise WaitTimeoutError(task_arns, minutes) from e
        raise RuntimeError(f"Failed waiting for tasks to stop: {e}") from e
    log.debug("waitForResponse - tasks stopped")


def confirm_task_success(ecs: Any, cluster: str, task_arns: list[str]) -> None:
    """Raise if any container of the stopped tasks exited non-zero.

    Unlike the failures check, every failing container's reason is reported.
    """
    params = {"cluster": cluster, "tasks": task_arns}

    log.trace("describeTasksParameter", params)
    response = ecs.describe_tasks(**params)
    log.trace("describeTasksResponse", response)

    raise_on_failures(response.get("failures"))

    reasons = []
    for task in response.get("tasks", []):
        for container in task.get("containers", []):
            # No exit code means the container never exited cleanly
            if container.get("exitCode") != 0:
                reasons.append(container.get("reason") or "")

    if reasons:
        raise ContainerExitError(reasons)
