"""Built-in fields and validation rules.

Fields are ``leaf`` trees that parse raw text into a typed value::

    age = integer()                       # Success(42) / Failure("Must be a whole number")
    subscribed = boolean(default=True)
    colour = choice([("r", "Red"), ("g", "Green")])

Rules are plain callables with the signature::

    def rule(value) -> str | None:
        '''Return error message, or None if valid.'''

and are attached to a field with ``validate(rule(...), field)``::

    mail = validate(rule(required, email), text())

Parameterized rules are factory functions that return a rule.
"""

import re
from collections.abc import Callable, Sequence
from typing import Any

from formtree.errors import DefinitionError
from formtree.result import Failure, Result, Success
from formtree.tree import Leaf, leaf

# Type alias for a validation rule
type Validator = Callable[[Any], str | None]

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


def text(default: str | None = None) -> Leaf:
    """Any text, including the empty string."""
    return leaf(default, Success)


def textarea(default: str | None = None) -> Leaf:
    """Multi-line text; binds like ``text``."""
    return leaf(default, Success, widget="textarea")


def optional_text(default: str | None = None) -> Leaf:
    """Text, or None when left empty."""
    return leaf(default, lambda raw: Success(raw or None))


def _parse_int(raw: str) -> Result[str, int]:
    try:
        return Success(int(raw))
    except ValueError:
        return Failure("Must be a whole number")


def integer(default: int | None = None) -> Leaf:
    """A whole number."""
    return leaf(None if default is None else str(default), _parse_int, widget="number")


def optional_integer(default: int | None = None) -> Leaf:
    """A whole number, or None when left empty."""

    def parse(raw: str) -> Result[str, int | None]:
        if not raw:
            return Success(None)
        return _parse_int(raw)

    return leaf(None if default is None else str(default), parse, widget="number")


def number(default: float | None = None) -> Leaf:
    """Any number (int or float syntax), parsed as ``float``."""

    def parse(raw: str) -> Result[str, float]:
        try:
            return Success(float(raw))
        except ValueError:
            return Failure("Must be a number")

    return leaf(None if default is None else str(default), parse, widget="number")


def boolean(default: bool = False) -> Leaf:
    """A checkbox. ``true``/``1``/``yes``/``on`` are true; anything else false."""
    return leaf(
        "on" if default else None,
        lambda raw: Success(raw.lower() in _TRUE_VALUES),
        widget="checkbox",
    )


def choice[T](
    options: Sequence[tuple[T, str]],
    default: T | None = None,
) -> Leaf:
    """One of *options*, given as ``(value, label)`` pairs.

    Options are submitted by position (``"0"``, ``"1"``, ...) so values
    need not be strings. The parsed value is the option's value.
    """
    values = [value for value, _ in options]
    keys = [str(i) for i in range(len(options))]
    by_key = dict(zip(keys, values, strict=True))
    default_key = None
    if default is not None:
        if default not in values:
            msg = f"choice() default {default!r} is not one of the options"
            raise DefinitionError(msg)
        default_key = keys[values.index(default)]

    def parse(raw: str) -> Result[str, T]:
        if raw in by_key:
            return Success(by_key[raw])
        return Failure("Not a valid choice")

    return leaf(
        default_key,
        parse,
        widget="select",
        choices=tuple((key, label) for key, (_, label) in zip(keys, options, strict=True)),
    )


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(value: Any) -> str | None:
    """Value must be present and non-empty."""
    if value is None:
        return "This field is required"
    if isinstance(value, str) and not value.strip():
        return "This field is required"
    return None


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int) -> Validator:
    """String must be at most *n* characters."""

    def check(value: str) -> str | None:
        if len(value) > n:
            return f"Must be at most {n} characters"
        return None

    return check


def min_length(n: int) -> Validator:
    """String must be at least *n* characters."""

    def check(value: str) -> str | None:
        if len(value) < n:
            return f"Must be at least {n} characters"
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Basic email pattern: structure only, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def email(value: str) -> str | None:
    """Value must be a valid email address (basic format check)."""
    if not _EMAIL_RE.match(value):
        return "Not a valid email address"
    return None


# Basic URL pattern: scheme and host
_URL_RE = re.compile(r"^https?://[^\s/$.?#].\S*$", re.IGNORECASE)


def url(value: str) -> str | None:
    """Value must be a valid URL (http/https)."""
    if not _URL_RE.match(value):
        return "Must be a valid URL"
    return None


def matches(pattern: str, message: str | None = None) -> Validator:
    """Value must match the given regex pattern."""
    compiled = re.compile(pattern)

    def check(value: str) -> str | None:
        if not compiled.match(value):
            return message or f"Must match pattern: {pattern}"
        return None

    return check


# ---------------------------------------------------------------------------
# Choice and range
# ---------------------------------------------------------------------------


def one_of(*choices: str) -> Validator:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)

    def check(value: str) -> str | None:
        if value not in allowed:
            options = ", ".join(sorted(allowed))
            return f"Must be one of: {options}"
        return None

    return check


def in_range(low: float | None = None, high: float | None = None) -> Validator:
    """Number must lie within ``[low, high]``; either bound may be omitted."""

    def check(value: float) -> str | None:
        if low is not None and value < low:
            return f"Must be at least {low}"
        if high is not None and value > high:
            return f"Must be at most {high}"
        return None

    return check
