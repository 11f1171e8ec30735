"""Run a one-off ECS task with the launch settings of an existing service."""

from .config import RunTaskConfig
from .ecs import ContainerExitError, FailureReportedError, WaitTimeoutError
from .runner import RunTaskResult, run_task
from .task_definition import TaskDefinitionError

__all__ = [
    "ContainerExitError",
    "FailureReportedError",
    "RunTaskConfig",
    "RunTaskResult",
    "TaskDefinitionError",
    "WaitTimeoutError",
    "run_task",
]
