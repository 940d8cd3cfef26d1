"""Run condition primitives: stateless evaluators."""

from runconditions.primitives.errors import (
    ConditionError,
    ConfigurationError,
    ValidationError,
)
from runconditions.primitives.length_comparator import (
    When,
    check_length,
    compare_lengths,
    parse_target_length,
)
from runconditions.primitives.platform_matcher import (
    KNOWN_FAMILIES,
    PlatformExpectation,
    PlatformFacts,
    matches,
)

__all__ = [
    # Errors
    "ValidationError",
    "ConditionError",
    "ConfigurationError",
    # Length comparison
    "When",
    "check_length",
    "compare_lengths",
    "parse_target_length",
    # Platform matching
    "KNOWN_FAMILIES",
    "PlatformExpectation",
    "PlatformFacts",
    "matches",
]
