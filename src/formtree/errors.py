"""formtree exception hierarchy.

Shared across paths, tree composition, binding, and the adapters so
every module raises and catches the same types.

Only programmer mistakes are exceptions. A user submitting bad input
never raises: binding returns a ``Failure`` carrying path-addressed
messages instead.
"""

from typing import Any


class FormtreeError(Exception):
    """Base for all formtree-specific errors."""


class ConfigurationError(FormtreeError):
    """Raised when configuration is invalid or an optional dependency is missing."""


class DefinitionError(FormtreeError):
    """Raised when a form tree is composed incorrectly.

    Empty labels, labels containing the path separator, and sibling
    subtrees whose paths collide are all rejected the moment the
    offending node is built, never at bind time.
    """


class PathSyntaxError(DefinitionError, ValueError):
    """Raised when path text cannot be parsed into a ``FieldPath``."""


class PathLookupError(FormtreeError, LookupError):
    """Raised when a path does not address any node of a form tree.

    Usually a template asking ``sub_view`` for a sub-form that was never
    declared, so it is reported instead of silently defaulted.
    """

    def __init__(self, path: object, detail: str = "") -> None:
        self.path = path
        msg = f"No form node at path {str(path)!r}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class UnwrapError(FormtreeError):
    """Raised by ``Failure.unwrap()``.

    Attributes:
        error: The error carried by the failure.
    """

    def __init__(self, error: Any) -> None:
        self.error = error
        super().__init__(f"Called unwrap() on a failure: {error!r}")
