"""Host-side condition plumbing: build context, base directories, RunCondition."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from runconditions.constants import BUILD_LOGGER
from runconditions.primitives.errors import ConfigurationError
from runconditions.runtime.interpolation import expand
from runconditions.utils.logger import get_logger


@dataclass
class BuildContext:
    """What the build host hands a condition for one evaluation.

    Attributes:
        workspace: Build workspace root.
        artifacts_dir: Directory holding archived build artifacts.
        home: Host home directory.
        variables: Build environment and parameters used for macro expansion.
        logger: Build console; receives the condition's log lines. Defaults
            to the package build logger with its rotating log files.
    """

    workspace: Path
    artifacts_dir: Optional[Path] = None
    home: Optional[Path] = None
    variables: Dict[str, Any] = field(default_factory=dict)
    logger: logging.Logger = field(default_factory=lambda: get_logger(BUILD_LOGGER))

    def expand(self, text: str) -> str:
        return expand(text, self.variables)


class BaseDirectory:
    """Directory a file condition resolves its relative path against."""

    WORKSPACE = "workspace"
    ARTIFACTS = "artifacts"
    HOME = "home"

    ALL = [WORKSPACE, ARTIFACTS, HOME]

    DISPLAY_NAMES = {
        WORKSPACE: "Workspace",
        ARTIFACTS: "Artifacts directory",
        HOME: "Home directory",
    }

    def __init__(self, kind: str = WORKSPACE):
        if kind not in self.ALL:
            raise ConfigurationError(
                f"Unknown base directory: {kind!r}. Valid: {', '.join(self.ALL)}",
                field="base_dir",
                value=kind,
            )
        self.kind = kind

    def resolve(self, context: BuildContext) -> Path:
        if self.kind == self.WORKSPACE:
            path = context.workspace
        elif self.kind == self.ARTIFACTS:
            path = context.artifacts_dir
        else:
            path = context.home
        if path is None:
            raise ConfigurationError(
                f"Build context has no {self.DISPLAY_NAMES[self.kind].lower()}",
                field="base_dir",
                value=self.kind,
            )
        return Path(path)

    @classmethod
    def options(cls) -> List[Tuple[str, str]]:
        return [(cls.DISPLAY_NAMES[kind], kind) for kind in cls.ALL]

    def __eq__(self, other):
        return isinstance(other, BaseDirectory) and other.kind == self.kind

    def __hash__(self):
        return hash(self.kind)

    def __str__(self) -> str:
        return self.DISPLAY_NAMES[self.kind]

    def __repr__(self) -> str:
        return f"BaseDirectory({self.kind!r})"


class RunCondition(ABC):
    """A configurable predicate gating a build step.

    The host calls run_prebuild() before the build starts and run_perform()
    at the point the guarded step would run.
    """

    kind: ClassVar[str]
    display_name: ClassVar[str]

    def run_prebuild(self, context: BuildContext) -> bool:
        return True

    @abstractmethod
    def run_perform(self, context: BuildContext) -> bool:
        """Evaluate the condition for the current build."""
