"""OS condition: runs if the current operating system is of a given type."""

from typing import List, Optional

from runconditions.conditions.base import BuildContext, RunCondition
from runconditions.primitives import platform_matcher
from runconditions.primitives.errors import ValidationError
from runconditions.primitives.platform_matcher import (
    KNOWN_FAMILIES,
    PlatformExpectation,
    PlatformFacts,
)

FIELDS_REQUIRED_ERROR = "At least one of family, name, architecture or version must be specified"


class OSCondition(RunCondition):
    """Match the running platform against family, name, arch and version.

    Empty fields are not checked. ``facts`` overrides the platform-fact
    provider, e.g. when evaluating on behalf of a remote agent.
    """

    kind = "os"
    display_name = "Operating system"

    def __init__(
        self,
        family: Optional[str] = "",
        name: Optional[str] = "",
        arch: Optional[str] = "",
        version: Optional[str] = "",
        facts: Optional[PlatformFacts] = None,
    ):
        self.family = family or ""
        self.name = name or ""
        self.arch = arch or ""
        self.version = version or ""
        self.facts = facts

    def expectation(self, context: BuildContext) -> PlatformExpectation:
        """Build the expectation, expanding macros in non-empty fields only."""
        return PlatformExpectation.from_fields(
            family=context.expand(self.family) if self.family else None,
            name=context.expand(self.name) if self.name else None,
            arch=context.expand(self.arch) if self.arch else None,
            version=context.expand(self.version) if self.version else None,
        )

    def run_perform(self, context: BuildContext) -> bool:
        return platform_matcher.evaluate(
            self.expectation(context), actual=self.facts, log=context.logger
        )

    # Configuration-time validation

    @staticmethod
    def check_fields(
        family: Optional[str] = "",
        name: Optional[str] = "",
        arch: Optional[str] = "",
        version: Optional[str] = "",
    ) -> Optional[ValidationError]:
        if not (family or name or arch or version):
            return ValidationError(
                field="family",
                error=FIELDS_REQUIRED_ERROR,
                value={"family": family, "name": name, "arch": arch, "version": version},
            )
        return None

    @staticmethod
    def check_family(value: Optional[str]) -> Optional[ValidationError]:
        # Macro references can only be checked at evaluation time
        if value and "$" not in value and value.lower() not in KNOWN_FAMILIES:
            return ValidationError(field="family", error="Unknown OS family", value=value)
        return None

    @staticmethod
    def family_options() -> List[str]:
        return [""] + list(KNOWN_FAMILIES)

    def validate(self) -> List[ValidationError]:
        errors = [
            self.check_fields(self.family, self.name, self.arch, self.version),
            self.check_family(self.family),
        ]
        return [e for e in errors if e is not None]

    def __repr__(self) -> str:
        return (
            f"OSCondition(family={self.family!r}, name={self.name!r}, "
            f"arch={self.arch!r}, version={self.version!r})"
        )
