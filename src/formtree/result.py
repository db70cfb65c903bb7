"""Result — immutable container for a parsed value or its errors.

Used at two levels:

- per field, a leaf parser returns ``Success(value)`` or
  ``Failure("message")``;
- per form, ``bind()`` returns ``Success(value)`` or a ``Failure`` whose
  error is a tuple of ``FieldError`` entries in traversal order.

Results are falsy on failure, so you can write::

    result = bind(form, raw)
    if not result:
        return Template("form.html", view=to_view(form, raw, result.error))
    save(result.value)
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from formtree.errors import UnwrapError
from formtree.paths import FieldPath


@dataclass(frozen=True, slots=True)
class Success[A]:
    """A successfully produced value."""

    value: A

    @property
    def is_success(self) -> bool:
        return True

    def __bool__(self) -> bool:
        return True

    def map[B](self, fn: Callable[[A], B]) -> "Success[B]":
        return Success(fn(self.value))

    def and_then[R](self, fn: Callable[[A], R]) -> R:
        return fn(self.value)

    def unwrap(self) -> A:
        return self.value

    def value_or(self, default: Any) -> A:
        return self.value


@dataclass(frozen=True, slots=True)
class Failure[E]:
    """A failure. Never carries a usable value."""

    error: E

    @property
    def is_success(self) -> bool:
        return False

    def __bool__(self) -> bool:
        """Falsy — enables ``if not result:`` pattern."""
        return False

    def map(self, fn: Callable[[Any], Any]) -> "Failure[E]":
        return self

    def and_then(self, fn: Callable[[Any], Any]) -> "Failure[E]":
        return self

    def unwrap(self) -> Any:
        raise UnwrapError(self.error)

    def value_or[D](self, default: D) -> D:
        return default


type Result[E, A] = Success[A] | Failure[E]


@dataclass(frozen=True, slots=True)
class FieldError:
    """One path-addressed error message."""

    path: FieldPath
    message: str

    def __iter__(self):
        # Unpacks as ``path, message = error``
        yield self.path
        yield self.message


type Errors = tuple[FieldError, ...]


def combine[A, B, C](
    left: "Result[Errors, A]",
    right: "Result[Errors, B]",
    fn: Callable[[A, B], C],
) -> "Result[Errors, C]":
    """Applicatively combine two form-level results.

    Both successful: ``Success(fn(a, b))``. Otherwise a ``Failure`` with
    every error from the left side followed by every error from the
    right side. Never short-circuits.
    """
    match left, right:
        case Success(value=a), Success(value=b):
            return Success(fn(a, b))
        case _:
            errors: Errors = ()
            if isinstance(left, Failure):
                errors += left.error
            if isinstance(right, Failure):
                errors += right.error
            return Failure(errors)
