"""File length comparison.

Decides whether a measured file length stands in a given relation to a
target length. The file stat itself happens in the caller; an absent file
arrives here as ``None`` and never satisfies any operator.
"""

import logging
import operator as _op
import re
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from runconditions.primitives.errors import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

# Signed 64-bit bounds, matching the host's long arithmetic
LONG_MIN = -(2 ** 63)
LONG_MAX = 2 ** 63 - 1

_LENGTH_RE = re.compile(r"[+-]?[0-9]+")

LENGTH_ERROR = "Length must be a non-negative integer"


class When(Enum):
    """Comparison operators for the ``when`` field."""

    EQ = ("eq", "Equal to")
    GE = ("ge", "Greater than or equal to")
    GT = ("gt", "Greater than")
    LE = ("le", "Less than or equal to")
    LT = ("lt", "Less than")
    NE = ("ne", "Not equal to")

    def __init__(self, symbol: str, display_name: str):
        self.symbol = symbol
        self.display_name = display_name

    def compare(self, left: int, right: int) -> bool:
        """Return whether ``left`` stands in this relation to ``right``."""
        return _COMPARATORS[self](left, right)

    @classmethod
    def from_symbol(cls, symbol: str) -> "When":
        for member in cls:
            if member.symbol == symbol:
                return member
        valid = ", ".join(m.symbol for m in cls)
        raise ConfigurationError(
            f"Unknown comparison operator: {symbol!r}. Valid: {valid}",
            field="when",
            value=symbol,
        )

    @classmethod
    def options(cls) -> List[Tuple[str, str]]:
        """(display_name, symbol) pairs in declaration order."""
        return [(m.display_name, m.symbol) for m in cls]


_COMPARATORS: Dict[When, Callable[[int, int], bool]] = {
    When.EQ: _op.eq,
    When.GE: _op.ge,
    When.GT: _op.gt,
    When.LE: _op.le,
    When.LT: _op.lt,
    When.NE: _op.ne,
}


def check_length(value: Optional[str]) -> Optional[ValidationError]:
    """Validate a target length setting.

    Returns:
        None if ``value`` is a non-negative 64-bit integer, otherwise a
        ValidationError for the ``length`` field.
    """
    if value is None or not _LENGTH_RE.fullmatch(value):
        return ValidationError(field="length", error=LENGTH_ERROR, value=value)
    number = int(value)
    if number < LONG_MIN or number > LONG_MAX or number < 0:
        return ValidationError(field="length", error=LENGTH_ERROR, value=value)
    return None


def parse_target_length(value: Optional[str]) -> int:
    """Parse a target length, raising ConfigurationError when malformed."""
    error = check_length(value)
    if error is not None:
        raise ConfigurationError.from_validation(error)
    return int(value)


def compare_lengths(measured_length: Optional[int], target_length: int, when: When) -> bool:
    """Compare already-parsed values. ``None`` means the file is absent."""
    if measured_length is None:
        return False
    return when.compare(measured_length, target_length)


def evaluate(
    measured_length: Optional[int],
    target_length: str,
    operator: str,
    log: Optional[logging.Logger] = None,
) -> bool:
    """Evaluate a file length check.

    Configuration is validated before the file-absent short circuit, so a bad
    length or operator fails loudly even when there is nothing to compare.

    Args:
        measured_length: Byte length of the file, or None if it does not exist.
        target_length: Target length as configured (already macro-expanded).
        operator: One of eq, ne, gt, ge, lt, le.
        log: Logger receiving the descriptive line (defaults to module logger).

    Returns:
        True if the measured length satisfies the comparison.

    Raises:
        ConfigurationError: Malformed length or unknown operator.
    """
    target = parse_target_length(target_length)
    when = When.from_symbol(operator)
    (log or logger).info(
        "comparing file length to target length %d with operator %s", target, when.symbol
    )
    return compare_lengths(measured_length, target, when)
