"""
Interactive field readers.

Each reader prompts, parses, and validates one field, re-prompting
until the value is acceptable. Parsing is split from prompting so the
parse rules can be tested without a terminal.
"""

from typing import Callable, Optional, TypeVar

from rich.console import Console
from rich.markup import escape

from lab_tools.core.log_analyzer import TIMESTAMP_LENGTH

T = TypeVar("T")


class FieldParseError(ValueError):
    """Raised when raw input cannot be turned into a valid field value."""

    def __init__(self, field: str, raw: str, reason: str):
        super().__init__(f"Invalid {field}: {reason}")
        self.field = field
        self.raw = raw
        self.reason = reason


def parse_int(
    raw: str,
    field: str,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None
) -> int:
    """Parse an integer, optionally bounded (inclusive)."""
    text = raw.strip()
    try:
        value = int(text)
    except ValueError:
        raise FieldParseError(field, raw, "please enter a whole number")

    if minimum is not None and maximum is not None:
        if not minimum <= value <= maximum:
            raise FieldParseError(field, raw, f"please enter a value between {minimum} and {maximum}")
    elif minimum is not None and value < minimum:
        raise FieldParseError(field, raw, f"please enter a value of at least {minimum}")
    elif maximum is not None and value > maximum:
        raise FieldParseError(field, raw, f"please enter a value of at most {maximum}")
    return value


def parse_price(raw: str, field: str = "price") -> float:
    """Parse a non-negative decimal amount."""
    text = raw.strip().lstrip("$")
    try:
        value = float(text)
    except ValueError:
        raise FieldParseError(field, raw, "please enter a number")

    if value != value or value in (float("inf"), float("-inf")):
        raise FieldParseError(field, raw, "please enter a finite number")
    if value < 0:
        raise FieldParseError(field, raw, "cannot be negative")
    return value


def parse_name(raw: str, max_length: int, field: str = "name") -> str:
    """Parse a non-empty name of bounded length."""
    text = raw.strip()
    if not text:
        raise FieldParseError(field, raw, "cannot be empty")
    if len(text) > max_length:
        raise FieldParseError(field, raw, f"must be at most {max_length} characters")
    return text


def parse_time(raw: str, field: str) -> str:
    """Parse an HH:MM:SS time bound.

    Only the length is enforced, matching how timestamps are compared.
    """
    text = raw.strip()
    if len(text) != TIMESTAMP_LENGTH:
        raise FieldParseError(field, raw, "use the HH:MM:SS format")
    return text


def read_field(console: Console, prompt: str, parse: Callable[[str], T]) -> T:
    """Prompt until parse accepts the input.

    EOFError from the console propagates so callers can end the session.
    """
    while True:
        raw = console.input(prompt)
        try:
            return parse(raw)
        except FieldParseError as e:
            console.print(f"[red]{escape(str(e))}[/]", highlight=False, soft_wrap=True)
