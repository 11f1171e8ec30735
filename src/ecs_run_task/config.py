"""Configuration for a single run-task invocation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Poll interval for the tasks_stopped waiter
WAIT_DELAY_SECONDS = 5
DEFAULT_WAIT_MINUTES = 360


def default_workspace() -> Path:
    """Base directory for relative task-definition paths."""
    workspace = os.environ.get("GITHUB_WORKSPACE")
    if workspace:
        return Path(workspace)
    return Path.cwd()


class RunTaskConfig(BaseModel):
    """Configuration for registering and running a task alongside a service."""

    model_config = ConfigDict(frozen=True)

    cluster: str
    service: str
    count: int = Field(ge=1)
    task_definition: str
    wait_for_finish: Optional[str] = None
    wait_for_minutes: int = Field(default=DEFAULT_WAIT_MINUTES, gt=0)
    region: Optional[str] = None
    workspace: Path = Field(default_factory=default_workspace)

    @field_validator("wait_for_minutes", "region", mode="before")
    @classmethod
    def _blank_is_unset(cls, value, info):
        # Actions passes unset inputs as empty strings
        if isinstance(value, str) and value.strip() == "":
            return DEFAULT_WAIT_MINUTES if info.field_name == "wait_for_minutes" else None
        return value

    @property
    def should_wait(self) -> bool:
        return bool(self.wait_for_finish) and self.wait_for_finish.lower() == "true"

    @property
    def max_attempts(self) -> int:
        """Number of waiter polls that fit in wait_for_minutes."""
        return self.wait_for_minutes * 60 // WAIT_DELAY_SECONDS

    @property
    def task_definition_path(self) -> Path:
        path = Path(self.task_definition)
        if path.is_absolute():
            return path
        return self.workspace / path
