"""Run condition runtime services: platform facts, file stat, macro expansion."""

from runconditions.runtime.file_stat import FileStat, stat_file
from runconditions.runtime.interpolation import expand, resolve_path
from runconditions.runtime.platform_facts import (
    get_platform_facts,
    read_platform_facts,
)

__all__ = [
    "FileStat",
    "stat_file",
    "expand",
    "resolve_path",
    "get_platform_facts",
    "read_platform_facts",
]
