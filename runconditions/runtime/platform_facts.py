"""Platform-fact provider.

Reads the running host's operating system name, architecture and version
from the interpreter and normalises them to the lowercase forms the OS
condition matches against.
"""

import logging
import os
import platform
from functools import lru_cache

from runconditions.primitives.platform_matcher import PlatformFacts

logger = logging.getLogger(__name__)


def _os_name() -> str:
    system = platform.system()
    if system == "Windows":
        return f"windows {platform.release()}".strip()
    if system == "Darwin":
        return "mac os x"
    return system


# platform.machine() spellings mapped to the os.arch names build configs use
_ARCH_ALIASES = {
    "x86_64": "amd64",
    "x64": "amd64",
    "i386": "x86",
    "i486": "x86",
    "i586": "x86",
    "i686": "x86",
    "arm64": "aarch64",
    "armv7l": "arm",
}


def _os_arch() -> str:
    machine = platform.machine().lower()
    return _ARCH_ALIASES.get(machine, machine)


def _os_version() -> str:
    system = platform.system()
    if system == "Darwin":
        return platform.mac_ver()[0] or platform.release()
    if system == "Windows":
        # major.minor only, e.g. "10.0"
        return ".".join(platform.version().split(".")[:2])
    return platform.release()


def read_platform_facts() -> PlatformFacts:
    """Read facts from the interpreter without caching."""
    facts = PlatformFacts.from_values(
        name=_os_name(),
        arch=_os_arch(),
        version=_os_version(),
        path_separator=os.pathsep,
    )
    logger.debug(
        f"Platform facts: name={facts.name} arch={facts.arch} "
        f"version={facts.version} family={facts.family}"
    )
    return facts


@lru_cache(maxsize=1)
def get_platform_facts() -> PlatformFacts:
    """Get cached facts for the running host."""
    return read_platform_facts()
