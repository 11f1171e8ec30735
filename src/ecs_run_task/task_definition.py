"""Loading task-definition documents from disk."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


class TaskDefinitionError(RuntimeError):
    """The task-definition file could not be read or parsed."""


def load_task_definition(path: Path) -> dict[str, Any]:
    """Read a YAML or JSON task definition; return the register request.

    The document must already have the shape ECS RegisterTaskDefinition
    expects (family, containerDefinitions, ...). It is returned as-is.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TaskDefinitionError(f"Cannot read task definition '{path}': {e}") from e

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise TaskDefinitionError(f"Cannot parse task definition '{path}': {e}") from e

    if not isinstance(document, dict):
        raise TaskDefinitionError(
            f"Task definition '{path}' must be a mapping, got {type(document).__name__}"
        )

    bad_keys = [key for key in document if not isinstance(key, str)]
    if bad_keys:
        raise TaskDefinitionError(
            f"Task definition '{path}' has non-string keys: {bad_keys}"
        )
    return document
