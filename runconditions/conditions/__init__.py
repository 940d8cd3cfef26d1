"""Run conditions exposed to the build host."""

from runconditions.conditions.base import BaseDirectory, BuildContext, RunCondition
from runconditions.conditions.file_length import FileLengthCondition
from runconditions.conditions.loader import (
    CONDITION_TYPES,
    ConditionLoader,
    build_condition,
    get_conditions_loader,
    load,
)
from runconditions.conditions.os_condition import OSCondition

__all__ = [
    "BaseDirectory",
    "BuildContext",
    "RunCondition",
    "FileLengthCondition",
    "OSCondition",
    "CONDITION_TYPES",
    "ConditionLoader",
    "build_condition",
    "get_conditions_loader",
    "load",
]
