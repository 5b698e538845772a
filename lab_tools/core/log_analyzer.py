"""
Log line classification and time-range search.

Works on any iterable of text lines formatted as
``HH:MM:SS [LEVEL] - message``. Both operations are a single streaming
pass; no parsed lines are retained beyond the returned results.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

logger = logging.getLogger(__name__)

TIMESTAMP_LENGTH = 8


class Severity(Enum):
    """Severity derived from a bracketed tag in the log line."""
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    UNKNOWN = "UNKNOWN"

    @property
    def tag(self) -> str:
        return f"[{self.value}]"


# Checked in this order; the first tag found wins.
_SEVERITY_PRIORITY = (Severity.ERROR, Severity.WARNING, Severity.INFO)


class InputError(ValueError):
    """Raised when a search is requested with an unusable time range."""


@dataclass(frozen=True)
class LevelCounts:
    """Accumulated counts from a classification pass."""
    total: int = 0
    error_count: int = 0
    warning_count: int = 0
    info_count: int = 0

    @property
    def unknown_count(self) -> int:
        """Lines that carried no recognized severity tag."""
        return self.total - self.error_count - self.warning_count - self.info_count


def classify_line(line: str) -> Severity:
    """Return the severity of a single line.

    A line that contains several tags is classified by the highest
    priority one (ERROR > WARNING > INFO).
    """
    for severity in _SEVERITY_PRIORITY:
        if severity.tag in line:
            return severity
    return Severity.UNKNOWN


def classify_and_count(lines: Iterable[str]) -> LevelCounts:
    """Count lines per severity in a single pass.

    Args:
        lines: Log lines, with or without trailing newlines

    Returns:
        LevelCounts for every line consumed (all zeros for empty input)
    """
    total = 0
    counts = {
        Severity.ERROR: 0,
        Severity.WARNING: 0,
        Severity.INFO: 0,
        Severity.UNKNOWN: 0,
    }

    for line in lines:
        total += 1
        counts[classify_line(line)] += 1

    result = LevelCounts(
        total=total,
        error_count=counts[Severity.ERROR],
        warning_count=counts[Severity.WARNING],
        info_count=counts[Severity.INFO],
    )
    logger.debug("Classified %d lines: %s", total, result)
    return result


def validate_time_range(start: str, end: str) -> None:
    """Check a search range before any line is read.

    Raises:
        InputError: If either bound is not exactly 8 characters, or if
            start sorts after end
    """
    if len(start) != TIMESTAMP_LENGTH or len(end) != TIMESTAMP_LENGTH:
        raise InputError(
            f"Time bounds must be exactly {TIMESTAMP_LENGTH} characters (HH:MM:SS), "
            f"got {start!r} and {end!r}"
        )
    if start > end:
        raise InputError(f"Start time {start} is after end time {end}")


def search_by_time_range(lines: Iterable[str], start: str, end: str) -> List[str]:
    """Return the lines whose timestamp falls within [start, end].

    The timestamp is the first 8 characters of the line, compared as a
    string. Lines shorter than that are compared on whatever prefix
    they have, so a malformed line is simply unlikely to match.

    Args:
        lines: Log lines in file order
        start: Inclusive lower bound, HH:MM:SS
        end: Inclusive upper bound, HH:MM:SS

    Returns:
        Matching lines in input order (possibly empty)

    Raises:
        InputError: If the range itself is invalid
    """
    validate_time_range(start, end)

    matches = []
    for line in lines:
        timestamp = line[:TIMESTAMP_LENGTH]
        if start <= timestamp <= end:
            matches.append(line)

    logger.debug("Found %d lines between %s and %s", len(matches), start, end)
    return matches
