"""Operating system matching.

Matches an expectation (family, name, arch, version; each optional) against
the facts of the running platform. Every specified field must match; an
expectation with no fields matches any platform.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from runconditions.primitives.errors import ConfigurationError

logger = logging.getLogger(__name__)

FAMILY_9X = "win9x"
FAMILY_DOS = "dos"
FAMILY_MAC = "mac"
FAMILY_NETWARE = "netware"
FAMILY_NT = "winnt"
FAMILY_OS2 = "os/2"
FAMILY_OS400 = "os/400"
FAMILY_TANDEM = "tandem"
FAMILY_UNIX = "unix"
FAMILY_VMS = "openvms"
FAMILY_WINDOWS = "windows"
FAMILY_ZOS = "z/os"

KNOWN_FAMILIES: Tuple[str, ...] = tuple(
    sorted(
        [
            FAMILY_9X,
            FAMILY_DOS,
            FAMILY_MAC,
            FAMILY_NETWARE,
            FAMILY_NT,
            FAMILY_OS2,
            FAMILY_OS400,
            FAMILY_TANDEM,
            FAMILY_UNIX,
            FAMILY_VMS,
            FAMILY_WINDOWS,
            FAMILY_ZOS,
        ]
    )
)

# Order used to pick the single family reported by PlatformFacts.family
_PRIMARY_FAMILY_ORDER = (
    FAMILY_WINDOWS,
    FAMILY_OS2,
    FAMILY_NETWARE,
    FAMILY_ZOS,
    FAMILY_OS400,
    FAMILY_VMS,
    FAMILY_TANDEM,
    FAMILY_MAC,
    FAMILY_UNIX,
    FAMILY_DOS,
)

_DARWIN = "darwin"


@dataclass(frozen=True)
class PlatformFacts:
    """Facts about a platform, as reported by the platform-fact provider.

    ``name``, ``arch`` and ``version`` are lowercase. ``path_separator`` is
    the separator used in PATH-like variables (``:`` or ``;``) and takes part
    in the unix/dos family tests.
    """

    name: str
    arch: str
    version: str
    path_separator: str = ":"

    @classmethod
    def from_values(
        cls, name: str, arch: str, version: str, path_separator: str = ":"
    ) -> "PlatformFacts":
        return cls(
            name=name.lower(),
            arch=arch.lower(),
            version=version.lower(),
            path_separator=path_separator,
        )

    @property
    def family(self) -> str:
        for family in _PRIMARY_FAMILY_ORDER:
            if self.is_family(family):
                return family
        return ""

    def is_family(self, family: str) -> bool:
        """Return whether this platform belongs to ``family``.

        Raises:
            ConfigurationError: ``family`` is not a known family name.
        """
        family = family.lower()
        name = self.name
        if family == FAMILY_WINDOWS:
            return FAMILY_WINDOWS in name
        if family == FAMILY_OS2:
            return FAMILY_OS2 in name
        if family == FAMILY_NETWARE:
            return FAMILY_NETWARE in name
        if family == FAMILY_DOS:
            return self.path_separator == ";" and not self.is_family(FAMILY_NETWARE)
        if family == FAMILY_MAC:
            return FAMILY_MAC in name or _DARWIN in name
        if family == FAMILY_TANDEM:
            return "nonstop_kernel" in name
        if family == FAMILY_UNIX:
            return (
                self.path_separator == ":"
                and not self.is_family(FAMILY_VMS)
                and (
                    not self.is_family(FAMILY_MAC)
                    or name.endswith("x")
                    or _DARWIN in name
                )
            )
        if family == FAMILY_9X:
            return self.is_family(FAMILY_WINDOWS) and self._is_windows_9x()
        if family == FAMILY_NT:
            return self.is_family(FAMILY_WINDOWS) and not self._is_windows_9x()
        if family == FAMILY_ZOS:
            return FAMILY_ZOS in name or "os/390" in name
        if family == FAMILY_OS400:
            return FAMILY_OS400 in name
        if family == FAMILY_VMS:
            return FAMILY_VMS in name
        raise ConfigurationError(
            f'Don\'t know how to detect os family "{family}"',
            field="family",
            value=family,
        )

    def _is_windows_9x(self) -> bool:
        return any(marker in self.name for marker in ("95", "98", "me", "ce"))


def _absent_if_empty(value: Optional[str]) -> Optional[str]:
    return value if value else None


@dataclass(frozen=True)
class PlatformExpectation:
    """Expected platform attributes. ``None`` means "not checked"."""

    family: Optional[str] = None
    name: Optional[str] = None
    arch: Optional[str] = None
    version: Optional[str] = None

    def __post_init__(self):
        # Empty strings come from unset form fields; treat them as absent
        for field_name in ("family", "name", "arch", "version"):
            object.__setattr__(
                self, field_name, _absent_if_empty(getattr(self, field_name))
            )

    @classmethod
    def from_fields(
        cls,
        family: Optional[str] = None,
        name: Optional[str] = None,
        arch: Optional[str] = None,
        version: Optional[str] = None,
    ) -> "PlatformExpectation":
        return cls(family=family, name=name, arch=arch, version=version)

    def is_empty(self) -> bool:
        return not (self.family or self.name or self.arch or self.version)

    def describe(self) -> str:
        return "family = {}, name = {}, arch = {}, version = {}".format(
            self.family or "", self.name or "", self.arch or "", self.version or ""
        )


def matches(expectation: PlatformExpectation, actual: PlatformFacts) -> bool:
    """Return whether ``actual`` satisfies every specified expectation field.

    Raises:
        ConfigurationError: The expected family is not a known family.
    """
    if expectation.family is not None and not actual.is_family(expectation.family):
        return False
    if expectation.name is not None and expectation.name.lower() != actual.name.lower():
        return False
    if expectation.arch is not None and expectation.arch.lower() != actual.arch.lower():
        return False
    if (
        expectation.version is not None
        and expectation.version.lower() != actual.version.lower()
    ):
        return False
    return True


def evaluate(
    expectation: PlatformExpectation,
    actual: Optional[PlatformFacts] = None,
    log: Optional[logging.Logger] = None,
) -> bool:
    """Evaluate an OS expectation against the running platform.

    Args:
        expectation: Expected attributes (already macro-expanded).
        actual: Platform facts; defaults to the running host.
        log: Logger receiving the descriptive line (defaults to module logger).
    """
    if actual is None:
        from runconditions.runtime.platform_facts import get_platform_facts

        actual = get_platform_facts()
    (log or logger).info("OS condition: %s", expectation.describe())
    return matches(expectation, actual)
